from setuptools import setup

EXTRAS_REQUIRE = {
    "tests": ("coverage", "psycopg2-binary", "pytest"),
}
EXTRAS_REQUIRE["dev"] = EXTRAS_REQUIRE["tests"]

setup(
    name="Bookstore-API",
    version="1.0.0",
    description="CRUD REST API for authors and books, built on Flask",
    license="MIT",
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Framework :: Flask",
        "Environment :: Web Environment",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    ],
    keywords="rest flask bookstore",
    packages=("bookstore_api",),
    install_requires=(
        "Flask>=3.0",
        "Flask-SQLAlchemy>=3.0",
        "marshmallow>=3.13.0",
        "SQLAlchemy>=1.4",
        "Werkzeug>=2.3",
        "konch>=4.0",
        "PyJWT>=2.0.0",
        "cryptography>=2.0.0",
        "click>=8.0",
    ),
    extras_require=EXTRAS_REQUIRE,
    entry_points={
        "console_scripts": ("bookstore-api = bookstore_api.__main__:main",),
        "flask.commands": ("shell = bookstore_api.shell:cli",),
    },
)
