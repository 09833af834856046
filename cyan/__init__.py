__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'cyan'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .boxes import *
from .equality import *
from .expectations import *
from .faults import *
from .paths import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the boxes
__all__ += boxes.__all__  # type: ignore[attr-defined]
# Load the exposed API of the equality
__all__ += equality.__all__  # type: ignore[attr-defined]
# Load the exposed API of the expectations
__all__ += expectations.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the paths
__all__ += paths.__all__  # type: ignore[attr-defined]
