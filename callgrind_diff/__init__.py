"""Compare instruction counts across several callgrind_annotate outputs."""

from .annotate import Run, parse_annotate, parse_annotate_file
from .display import display
from .options import DisplayConfig
from .records import Records

__version__ = "0.1.0"
