"""sharpkit: C# code actions and namespace inference for editors and agents."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sharpkit")
except PackageNotFoundError:
    __version__ = "dev"
