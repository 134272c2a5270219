from setuptools import find_packages, setup

setup(
    name="webclient",
    version="0.1.0",
    description="A minimal command line HTTP client",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "httpx >= 0.24",
        "docopt >= 0.6.2",
    ],
    extras_require={
        "test": [
            "pytest >= 7",
        ],
    },
    entry_points={
        "console_scripts": [
            "webclient = webclient.__main__:main",
        ],
    },
)
