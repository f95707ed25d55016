from setuptools import setup, find_packages

setup(
    name="freekeel",
    version="1.0.0",
    description="Mark up PDFs with text and freehand strokes and save them flattened",
    author="FreeKeel Team",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "PyQt6>=6.6.0",
        "PyMuPDF>=1.23.0",
        "Pillow>=10.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "gui_scripts": [
            "freekeel=freekeel.main:main",
        ],
    },
    python_requires=">=3.8",
)
