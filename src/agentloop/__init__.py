from importlib.metadata import PackageNotFoundError, version
import logging

try:
    __version__ = version("agentloop")
except PackageNotFoundError:
    # running from a source checkout without installation
    __version__ = "0.0.0"

# add nullhandler to prevent a default configuration being used if the calling application doesn't set one
logging.getLogger("agentloop").addHandler(logging.NullHandler())
