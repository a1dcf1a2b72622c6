from setuptools import setup, find_packages
setup(
    name="property_reconciler",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.5",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        'console_scripts': [
            'property_reconciler=property_reconciler.__main__:_safe_main'
        ]
    }
)
