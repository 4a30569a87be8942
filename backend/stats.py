import math
from datetime import datetime, timezone

from schemas import AggregatedStats, FaceitData, FaceitPlayerDetails, MatchStats

WIN_RESULT = "1"


def parse_int(value: str | None) -> int | None:
    """Parses a non-negative count, or returns None if the field is missing or malformed."""
    if not isinstance(value, str):
        return None
    digits = value.strip()
    # Counts are unsigned: no sign, no '_' separators, ASCII digits only.
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    return int(digits)


def parse_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value.strip())
    except (AttributeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def aggregate(matches: list[MatchStats] | None) -> AggregatedStats:
    """
    Folds a window of matches into summary stats.

    Fields that don't parse are skipped for that match only. Averages are
    taken over the number of matches, and every ratio is 0 when its
    denominator is 0. No matches at all gives all-zero stats.
    """
    if not matches:
        return AggregatedStats()

    total_adr = 0.0
    total_kr_ratio = 0.0
    wins = losses = 0
    kills = deaths = headshots = 0
    double_kills = triple_kills = quadro_kills = penta_kills = 0

    for match in matches:
        if match.result == WIN_RESULT:
            wins += 1
        else:
            losses += 1

        total_adr += parse_float(match.adr) or 0.0
        total_kr_ratio += parse_float(match.kr_ratio) or 0.0
        kills += parse_int(match.kills) or 0
        deaths += parse_int(match.deaths) or 0
        headshots += parse_int(match.headshots) or 0
        double_kills += parse_int(match.double_kills) or 0
        triple_kills += parse_int(match.triple_kills) or 0
        quadro_kills += parse_int(match.quadro_kills) or 0
        penta_kills += parse_int(match.penta_kills) or 0

    match_count = len(matches)
    decided = wins + losses

    return AggregatedStats(
        adr=total_adr / match_count,
        wins=wins,
        losses=losses,
        win_rate=round_half_up(wins / decided * 100) if decided > 0 else 0,
        kills=kills,
        deaths=deaths,
        kd_ratio=kills / deaths if deaths > 0 else 0.0,
        kr_ratio=total_kr_ratio / match_count,
        headshots=headshots,
        headshot_percentage=headshots / kills * 100 if kills > 0 else 0.0,
        double_kills=double_kills,
        triple_kills=triple_kills,
        quadro_kills=quadro_kills,
        penta_kills=penta_kills,
    )


def parse_account_created(activated_at: str | None) -> int:
    """UNIX seconds from FACEIT's RFC 3339 activation date, 0 if it won't parse."""
    if not activated_at:
        return 0
    try:
        parsed = datetime.fromisoformat(activated_at.replace("Z", "+00:00"))
    except ValueError:
        return 0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def build_profile_data(
    details: FaceitPlayerDetails | None, aggregated: AggregatedStats
) -> FaceitData | None:
    if details is None:
        return None

    # Players who never queued CS2 get level/elo 0.
    cs2 = details.games.cs2
    level, elo = (cs2.skill_level, cs2.faceit_elo) if cs2 else (0, 0)

    return FaceitData(
        **aggregated.model_dump(),
        nickname=details.nickname,
        avatar=details.avatar,
        country=details.country,
        level=level,
        elo=elo,
        account_created=parse_account_created(details.activated_at),
    )
