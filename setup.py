from setuptools import setup, find_packages

setup(
    name="lrc-extended",
    version="0.1.0",
    description="Parse, normalize, export and play word-timed (extended) LRC karaoke lyrics from the terminal",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    license="MIT",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={
        "lrc_extended": ["py.typed"],
        "lrc_extended.i18n": ["*.json"],
    },
    install_requires=[
        "colorama",
        "regex",
        "typer",
    ],
    extras_require={
        "mpris": [
            "dbus-python",
        ],
        "dev": [
            "pytest",
            "black",
            "ruff",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "lrc-extended=lrc_extended.cli:main",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Text Processing",
    ],
    keywords="lyrics lrc karaoke synchronized word-timing terminal",
)
