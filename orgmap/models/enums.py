from enum import Enum


class TeamCategory(str, Enum):
    FEATURE = "feature"
    GUILD = "guild"


# Channel name prefix that marks each category
CATEGORY_PREFIXES = {
    TeamCategory.FEATURE: "f-",
    TeamCategory.GUILD: "g-",
}
