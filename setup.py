from setuptools import setup, find_packages

setup(
    name="normal-viewer",
    version="0.1.0",
    description="Side-by-side viewer comparing angle-weighted and smooth vertex normals on a triangle mesh",
    author="",
    packages=find_packages(exclude=["tests"]),
    py_modules=["normal_viewer"],
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "trimesh",
        "matplotlib",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
