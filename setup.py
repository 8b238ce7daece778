from setuptools import setup, find_packages

setup(
    name="gimmickdump",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "gimmickdump.utils": ["templates/*.j2"],
    },
    entry_points={
        'console_scripts': [
            'gimmickdump=gimmickdump.cli:main',
        ],
    },
    install_requires=[
        "jinja2>=3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
    description="Gimmick table extractor for Dolphin MEM1 RAM dumps",
)
