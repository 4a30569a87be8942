from pydantic import BaseModel, ConfigDict, Field

# --- FACEIT API RESPONSES ---
# Only the fields we read are declared; anything else FACEIT sends is ignored.

class GameDetails(BaseModel):
    skill_level: int = 0
    faceit_elo: int = 0
    region: str | None = None
    game_player_id: str | None = None


class Games(BaseModel):
    cs2: GameDetails | None = None
    csgo: GameDetails | None = None


class FaceitPlayerDetails(BaseModel):
    player_id: str
    nickname: str
    avatar: str | None = None
    country: str = ""
    faceit_url: str = ""
    activated_at: str | None = None
    games: Games = Field(default_factory=Games)


class MatchStats(BaseModel):
    """One match from the FACEIT stats endpoint. Values arrive as strings."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    adr: str | None = Field(default=None, alias="ADR")
    kills: str | None = Field(default=None, alias="Kills")
    deaths: str | None = Field(default=None, alias="Deaths")
    kr_ratio: str | None = Field(default=None, alias="K/R Ratio")
    headshots: str | None = Field(default=None, alias="Headshots")
    double_kills: str | None = Field(default=None, alias="Double Kills")
    triple_kills: str | None = Field(default=None, alias="Triple Kills")
    quadro_kills: str | None = Field(default=None, alias="Quadro Kills")
    penta_kills: str | None = Field(default=None, alias="Penta Kills")
    result: str | None = Field(default=None, alias="Result")


class MatchItem(BaseModel):
    stats: MatchStats


class PlayerLastMatchesResponse(BaseModel):
    items: list[MatchItem] = Field(default_factory=list)


# --- OUR RESPONSE CONTRACT ---

class AggregatedStats(BaseModel):
    adr: float = 0.0
    wins: int = 0
    losses: int = 0
    win_rate: int = 0
    kills: int = 0
    deaths: int = 0
    kd_ratio: float = 0.0
    kr_ratio: float = 0.0
    headshots: int = 0
    headshot_percentage: float = 0.0
    double_kills: int = 0
    triple_kills: int = 0
    quadro_kills: int = 0
    penta_kills: int = 0


class FaceitData(AggregatedStats):
    nickname: str
    avatar: str | None = None
    country: str = ""
    level: int = 0
    elo: int = 0
    account_created: int = 0


class Site(BaseModel):
    url: str
    title: str


class Player(BaseModel):
    steam_id: str
    faceit_data: FaceitData | None = None
    sites: list[Site]
