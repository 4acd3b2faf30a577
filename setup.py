import setuptools

with open('README.md', encoding='utf8') as fp:
  readme = fp.read()

setuptools.setup(
  name = 'soundwrap',
  version = '1.0.0',
  description = 'A thin client for the SoundCloud API.',
  long_description = readme,
  long_description_content_type = 'text/markdown',
  python_requires = '>=3.7',
  install_requires = ['requests>=2.20'],
  extras_require = {'test': ['pytest']},
  packages = setuptools.find_packages('src'),
  package_dir = {'': 'src'},
  entry_points = {
    'console_scripts': ['soundwrap = soundwrap.__main__:main'],
  },
)
