from enum import Enum


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    CYAN = "cyan"
    DIM = "dim"


class MatchStatus(str, Enum):
    MATCH = "match"
    MISS = "miss"


MATCH_STATUS_STYLE = {
    MatchStatus.MATCH: UIStyle.GREEN.value,
    MatchStatus.MISS: UIStyle.DIM.value,
}