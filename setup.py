import setuptools

setuptools.setup(
    name="quote_gallery_tools",
    version="0.1",
    description="Quote Gallery: searchable, periodically refreshed catalog of images from a GitHub repository",
    packages=["controllers", "navigators", "repositories", "services", "utils"],
    py_modules=["main"],
    classifiers=["Programming Language :: Python :: 3", "Operating System :: OS Independent"],
    python_requires=">=3.11",
    install_requires=[
        "loguru",
        "curl_cffi",  # GitHub contents API listing
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["quote-gallery=main:main"],
    },
)
