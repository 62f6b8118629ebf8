from setuptools import setup, find_packages

setup(
    name="greedy_seg",
    version="0.1.0",
    packages=find_packages(include=["greedy_seg", "greedy_seg.*"]),
    package_data={"greedy_seg": ["configs/*.yaml"]},
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "scipy",
        "scikit-image",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "greedy_seg=greedy_seg.scripts.run_segmentation:main",
        ]
    },
)
