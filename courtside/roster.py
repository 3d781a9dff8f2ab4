"""In-memory roster of teams and players.

The roster is the collaborator the stat-entry flow uses to list selectable
players and, in team scoring mode, to decide which team a score belongs to.

Example:
    >>> roster = Roster()
    >>> roster.add_team(Team(id="LAL", name="Lakers"))
    >>> roster.add_player(Player(id="23", name="LeBron James",
    ...                          jersey_number=23, team_id="LAL"))
    >>> roster.team_of("23")
    'LAL'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from courtside.logging import get_logger
from courtside.types import PlayerId, RosterError, TeamId

logger = get_logger(__name__)


class Position(str, Enum):
    POINT_GUARD = "Point Guard"
    SHOOTING_GUARD = "Shooting Guard"
    SMALL_FORWARD = "Small Forward"
    POWER_FORWARD = "Power Forward"
    CENTER = "Center"


class Hand(str, Enum):
    LEFT = "Left"
    RIGHT = "Right"
    AMBIDEXTROUS = "Ambidextrous"


@dataclass
class Player:
    """A rostered player.

    Attributes:
        id: Unique player id.
        name: Display name.
        jersey_number: Jersey number shown in the player picker.
        team_id: Team the player belongs to.
        position: Listed position.
        height: Free-form height, e.g. "6'9\"".
        weight: Free-form weight, e.g. "250 lbs".
        date_of_birth: Birth date if known.
        dominant_hand: Shooting hand.
    """

    id: PlayerId
    name: str
    jersey_number: int
    team_id: TeamId
    position: Position = Position.SMALL_FORWARD
    height: str | None = None
    weight: str | None = None
    date_of_birth: date | None = None
    dominant_hand: Hand = Hand.RIGHT

    @property
    def label(self) -> str:
        return f"#{self.jersey_number} {self.name}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        """Create a player from a dictionary.

        Args:
            data: Mapping with at least id, name, jersey_number and team_id.
                position and dominant_hand take the enum display values.

        Returns:
            Player instance.
        """
        data = dict(data)
        if "position" in data:
            data["position"] = Position(data["position"])
        if "dominant_hand" in data:
            data["dominant_hand"] = Hand(data["dominant_hand"])
        if isinstance(data.get("date_of_birth"), str):
            data["date_of_birth"] = date.fromisoformat(data["date_of_birth"])
        data["id"] = str(data["id"])
        data["team_id"] = str(data["team_id"])
        return cls(**data)


@dataclass
class Team:
    id: TeamId
    name: str
    logo_url: str | None = None
    coach_id: str | None = None
    manager_id: str | None = None
    player_ids: list[PlayerId] = field(default_factory=list)


class Roster:
    """Teams and players held in memory, keyed by id."""

    def __init__(self) -> None:
        self._teams: dict[TeamId, Team] = {}
        self._players: dict[PlayerId, Player] = {}

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    @property
    def teams(self) -> list[Team]:
        return list(self._teams.values())

    def add_team(self, team: Team) -> None:
        if team.id in self._teams:
            raise RosterError(f"Team {team.id} is already on the roster")
        self._teams[team.id] = team

    def add_player(self, player: Player) -> None:
        """Add a player to an existing team.

        Raises:
            RosterError: If the player id is taken or the team is unknown.
        """
        if player.id in self._players:
            raise RosterError(f"Player {player.id} is already on the roster")
        team = self._teams.get(player.team_id)
        if team is None:
            raise RosterError(
                f"Cannot add {player.name}: unknown team {player.team_id}"
            )
        self._players[player.id] = player
        team.player_ids.append(player.id)

    def get_team(self, team_id: TeamId) -> Team:
        try:
            return self._teams[team_id]
        except KeyError:
            raise RosterError(f"Unknown team {team_id}") from None

    def get_player(self, player_id: PlayerId) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise RosterError(f"Unknown player {player_id}") from None

    def players_for_team(self, team_id: TeamId) -> list[Player]:
        """Return a team's players ordered by jersey number."""
        team = self.get_team(team_id)
        players = [self._players[pid] for pid in team.player_ids]
        return sorted(players, key=lambda p: p.jersey_number)

    def team_of(self, player_id: PlayerId) -> TeamId | None:
        player = self._players.get(player_id)
        return player.team_id if player is not None else None

    def player_name(self, player_id: PlayerId) -> str:
        """Return the player's label, or the raw id for unrostered players."""
        player = self._players.get(player_id)
        return player.label if player is not None else str(player_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Roster:
        """Build a roster from ``{"teams": [...], "players": [...]}``.

        Teams are ``{"id", "name"}`` mappings; players follow
        Player.from_dict.
        """
        roster = cls()
        for team_data in data.get("teams", []):
            roster.add_team(Team(id=str(team_data["id"]), name=team_data["name"]))
        for player_data in data.get("players", []):
            roster.add_player(Player.from_dict(player_data))
        logger.debug(
            "Loaded roster: {} teams, {} players", len(roster._teams), len(roster)
        )
        return roster
