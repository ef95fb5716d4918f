# setup.py
import os
import re

from setuptools import setup, find_packages

_HERE = os.path.abspath(os.path.dirname(__file__))


def _read_version():
    with open(os.path.join(_HERE, "src", "pluglog", "__init__.py"), encoding="utf-8") as f:
        match = re.search(r'^__version__\s*=\s*"([^"]+)"', f.read(), re.MULTILINE)
    return match.group(1) if match else "0.0.0"


setup(
    name="pluglog",
    version=_read_version(),
    description="Pluggable logging backends (file, syslog, console, silent) behind one Logger contract",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Encuentra automáticamente el paquete 'pluglog'
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'pluglog=pluglog.interface.cli.app:main',  # Permite ejecutar la herramienta vía CLI
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
