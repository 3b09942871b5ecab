from setuptools import setup, find_packages

setup(
    name="shapecanvas",
    version="0.1.0",
    description="A small PyQt5 canvas to place, move and save simple shapes",
    author="Vous",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "PyQt5>=5.15"
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": [
            "shapecanvas = shapecanvas.__main__:main"
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Framework :: PyQt5"
    ],
)
