from setuptools import setup, find_packages

with open("requirements.txt", encoding="utf-8") as req_fp:
  install_requires = [line.strip() for line in req_fp if line.strip() and not line.startswith("#")]

setup(
  name='blindseg',
  version='0.0.1',
  description='Frequency-driven n-gram counting and blind word induction for unsegmented text',
  license='Apache License',
  install_requires=install_requires,
  extras_require={
    'test': ['pytest'],
  },
  packages=find_packages(exclude=['test*']),
  python_requires='>=3.7',
  entry_points={
    'console_scripts': [
      'blindseg = blindseg.blindseg_run:main',
      'blindseg_interactive = blindseg.blindseg_interactive:main',
    ],
  }
)
