import re

from models.query import Sport

NBA_SPORT_TERMS = ("basketball", "nba")
NBA_PLAYER_TERMS = ("lebron", "giannis")
NBA_TEAMS = (
    "lakers",
    "celtics",
    "warriors",
    "bulls",
    "heat",
    "nets",
    "knicks",
    "bucks",
    "76ers",
    "raptors",
    "cavaliers",
    "pistons",
    "pacers",
    "hawks",
    "hornets",
    "wizards",
    "magic",
    "grizzlies",
    "pelicans",
    "spurs",
    "mavericks",
    "thunder",
    "trail blazers",
    "jazz",
    "nuggets",
    "timberwolves",
    "kings",
    "clippers",
    "suns",
    "rockets",
)

NFL_SPORT_TERMS = ("football", "nfl")
NFL_PLAYER_TERMS = ("mahomes", "lamar jackson")
NFL_TEAMS = (
    "chiefs",
    "patriots",
    "eagles",
    "bears",
    "lions",
    "packers",
    "vikings",
    "falcons",
    "panthers",
    "saints",
    "buccaneers",
    "commanders",
    "cowboys",
    "giants",
    "jets",
    "dolphins",
    "bills",
    "steelers",
    "browns",
    "bengals",
    "ravens",
    "chargers",
    "raiders",
    "broncos",
    "cardinals",
    "seahawks",
    "rams",
    "49ers",
    "texans",
    "colts",
    "jaguars",
    "titans",
)

NBA_KEYWORDS = frozenset(NBA_SPORT_TERMS + NBA_PLAYER_TERMS + NBA_TEAMS)
NFL_KEYWORDS = frozenset(NFL_SPORT_TERMS + NFL_PLAYER_TERMS + NFL_TEAMS)

# alias -> display name used when scanning boxscores
KNOWN_PLAYERS: dict[str, str] = {
    "lebron james": "LeBron James",
    "lebron": "LeBron James",
    "stephen curry": "Stephen Curry",
    "steph curry": "Stephen Curry",
    "giannis antetokounmpo": "Giannis Antetokounmpo",
    "giannis": "Giannis Antetokounmpo",
    "kevin durant": "Kevin Durant",
    "luka doncic": "Luka Doncic",
    "nikola jokic": "Nikola Jokic",
    "jokic": "Nikola Jokic",
    "jayson tatum": "Jayson Tatum",
    "joel embiid": "Joel Embiid",
    "anthony davis": "Anthony Davis",
    "shai gilgeous-alexander": "Shai Gilgeous-Alexander",
    "anthony edwards": "Anthony Edwards",
    "victor wembanyama": "Victor Wembanyama",
    "wembanyama": "Victor Wembanyama",
    "devin booker": "Devin Booker",
    "jalen brunson": "Jalen Brunson",
    "donovan mitchell": "Donovan Mitchell",
    "patrick mahomes": "Patrick Mahomes",
    "mahomes": "Patrick Mahomes",
    "lamar jackson": "Lamar Jackson",
    "josh allen": "Josh Allen",
    "joe burrow": "Joe Burrow",
    "jalen hurts": "Jalen Hurts",
    "travis kelce": "Travis Kelce",
    "justin jefferson": "Justin Jefferson",
    "christian mccaffrey": "Christian McCaffrey",
    "saquon barkley": "Saquon Barkley",
}


def _mentions(text: str, terms) -> list[str]:
    """Terms appearing in text as whole words, in first-appearance order."""
    found: list[tuple[int, str]] = []
    for term in terms:
        match = re.search(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])", text)
        if match:
            found.append((match.start(), term))
    return [term for _, term in sorted(found)]


def find_team_mentions(text: str, sport: Sport = Sport.BOTH) -> list[str]:
    """
    Return distinct known team nicknames mentioned in text.

    Unlike classification, this matches whole words so "hornets" does not
    also count as "nets".
    """
    lowered = (text or "").lower()
    if sport is Sport.NBA:
        teams = NBA_TEAMS
    elif sport is Sport.NFL:
        teams = NFL_TEAMS
    else:
        teams = NBA_TEAMS + NFL_TEAMS
    return _mentions(lowered, teams)


def find_player_mentions(text: str) -> list[str]:
    """Return distinct display names of known players mentioned in text."""
    lowered = (text or "").lower()
    names: list[str] = []
    for alias in _mentions(lowered, KNOWN_PLAYERS):
        name = KNOWN_PLAYERS[alias]
        if name not in names:
            names.append(name)
    return names


class SportClassifier:
    """Tags a question NBA, NFL or both using plain substring containment."""

    def __init__(self, nba_keywords=NBA_KEYWORDS, nfl_keywords=NFL_KEYWORDS):
        self._nba_keywords = frozenset(k.lower() for k in nba_keywords)
        self._nfl_keywords = frozenset(k.lower() for k in nfl_keywords)

    def classify(self, text: str) -> Sport:
        lowered = (text or "").lower()
        has_nba = any(keyword in lowered for keyword in self._nba_keywords)
        has_nfl = any(keyword in lowered for keyword in self._nfl_keywords)

        if has_nba and not has_nfl:
            return Sport.NBA
        if has_nfl and not has_nba:
            return Sport.NFL
        return Sport.BOTH
