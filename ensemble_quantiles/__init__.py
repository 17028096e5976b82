from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ensemble-quantiles")
except PackageNotFoundError:
    # package is not installed
    pass
