from setuptools import setup, find_packages

setup(
    name="frecent_jump",
    version="0.1.0",
    author="Unknown",
    description="Jump to frecently visited directories by typing a fragment of their path",
    packages=find_packages(include=["jump_common", "jump_common.*"]),
    install_requires=[
        "thefuzz==0.22.1",
        "msgpack==1.1.0",
        "tabulate==0.9.0",
        "PyYAML==6.0.2",
    ],
    extras_require={
        ':sys_platform == "win32"': [  # curses for the interactive picker
            "windows-curses>=2.4.0",
        ],
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
)
