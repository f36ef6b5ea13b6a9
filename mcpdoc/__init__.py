from mcpdoc._version import __version__
from mcpdoc.main import DocSource, create_server

__all__ = ["DocSource", "__version__", "create_server"]
