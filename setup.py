from setuptools import setup, find_packages

setup(
    name="sendgrid-rest",
    version="0.1.0",
    description="Async SendGrid v3 REST client for dynamic templates and templated email",
    author="",
    author_email="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "httpx>=0.24.0",
        "email-validator>=1.3.0",
        "python-dotenv>=0.19.0",
        "click>=8.0.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "PyYAML>=5.4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "respx>=0.20.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sendgrid-rest=sendgrid_rest.cli:main",
        ],
    },
)
