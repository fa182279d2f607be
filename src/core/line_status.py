from enum import Enum


class LineStatus(Enum):
    """
    Validation / health state of a hosts line — drives frontend coloring.
    """
    OK = "ok"              # active mapping, no errors, no warnings
    WARNING = "warning"    # usable but suspicious (e.g. address not IP-shaped)
    ERROR = "error"        # would write a broken record
    DISABLED = "disabled"  # commented-out mapping
    NOTE = "note"          # free-form comment block
