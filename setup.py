from setuptools import setup, find_packages

setup(
    name="dropfour",
    version="0.1.0",
    packages=find_packages(include=["dropfour", "dropfour.*"]),
    install_requires=[
        "numpy",
        "gymnasium",  # Gymnasium environment around the game engine
    ],
    extras_require={
        "test": ["pytest"],
    },
)
