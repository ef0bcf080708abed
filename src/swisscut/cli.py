"""Command-line interface for SwissCut.

``swisscut simulate`` plays a random tournament end to end and prints the
result. ``swisscut desk`` (or no arguments) opens an interactive organizer
shell with autocomplete for running a real event.
"""

# SwissCut
# Copyright (C) 2025  SwissCut developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import logging
import shlex
import sys
from typing import Callable, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from swisscut import engine
from swisscut.controllers.registration import Roster
from swisscut.exceptions import PendingMatchesException, SwissCutException
from swisscut.models.match import Match
from swisscut.models.tournament import Tournament
from swisscut.models.tournament_config import TournamentConfig
from swisscut.testing.simulator import SimulationConfig, TournamentSimulator
from swisscut.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


COMMANDS = {
    "add": "Register a player: add <name>",
    "remove": "Remove a player: remove <player id>",
    "players": "List registered players",
    "config": "Set options: config --rounds N --top-cut N --groups N --minutes N --timer",
    "start": "Start the tournament and pair round 1",
    "pending": "List unfinished matches of the active round",
    "result": "Record a result: result <table number or match id> <score1> <score2>",
    "next": "Advance to the next round or stage",
    "timer": "Start the round timer",
    "free": "Switch the active round to free time",
    "standings": "Show the current standings",
    "bracket": "Show the elimination bracket",
    "qualification": "Show provisional top cut marks (group stage)",
    "end": "End the tournament and return to registration",
    "help": "Show this list",
    "exit": "Leave the desk",
}


# ========== Rendering ==========


def format_standings(tournament: Tournament) -> str:
    lines = [f"{'#':>3}  {'Player':20} {'W':>3} {'L':>3} {'TP':>4} {'Des':>4}  Hist"]
    for rank, player in enumerate(engine.get_standings(tournament), start=1):
        group = f"[{player.group_id}] " if player.group_id else ""
        history = "".join(outcome.value for outcome in player.history)
        lines.append(
            f"{rank:>3}  {group + player.name:20} {player.wins:>3} {player.losses:>3} "
            f"{player.tournament_points:>4} {player.desafio:>4}  {history}"
        )
    return "\n".join(lines)


def format_match(tournament: Tournament, match: Match) -> str:
    def name(player_id: Optional[str]) -> str:
        if player_id is None:
            return "TBD"
        return tournament.get_player(player_id).name

    if match.is_bye:
        return f"{name(match.player1_id)} (bye)"
    line = f"{name(match.player1_id)} vs {name(match.player2_id)}"
    if match.is_completed:
        line += f"  {match.score1}-{match.score2}"
        if match.finished_overtime:
            line += " (overtime)"
    return line


def format_bracket(tournament: Tournament) -> str:
    bracket = engine.get_bracket(tournament)
    if not bracket:
        return "No elimination bracket yet"
    lines = []
    for round_number, matches in bracket.items():
        lines.append(f"Round {round_number}:")
        for match in matches:
            lines.append(f"  [{match.id}] {format_match(tournament, match)}")
    return "\n".join(lines)


# ========== Desk session ==========


def create_config_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="config", add_help=False)
    parser.add_argument("--rounds", type=int)
    parser.add_argument("--top-cut", type=int, choices=[2, 4, 8])
    parser.add_argument("--groups", type=int)
    parser.add_argument("--minutes", type=int)
    parser.add_argument("--timer", action="store_true")
    parser.add_argument("--name")
    return parser


class DeskSession:
    """Organizer state: a roster during registration, then a tournament.

    :meth:`execute` runs one command line and returns the text to show.
    Engine errors are reported back as text and leave the state unchanged.
    """

    def __init__(self, rng=None) -> None:
        self.rng = rng
        self.roster = Roster()
        self.tournament: Optional[Tournament] = None
        self.options: Dict[str, object] = {}
        self.handlers: Dict[str, Callable[[List[str]], str]] = {
            "add": self._add,
            "remove": self._remove,
            "players": self._players,
            "config": self._config,
            "start": self._start,
            "pending": self._pending,
            "result": self._result,
            "next": self._next,
            "timer": self._timer,
            "free": self._free,
            "standings": self._standings,
            "bracket": self._bracket,
            "qualification": self._qualification,
            "end": self._end,
            "help": self._help,
        }

    def execute(self, line: str) -> str:
        try:
            parts = shlex.split(line)
        except ValueError as e:
            return f"Could not read command ({e}). Check for unbalanced quotes"
        if not parts:
            return ""
        command = parts[0].lstrip("/")
        handler = self.handlers.get(command)
        if handler is None:
            return f"Unknown command: {command}. Type help to see available commands"
        try:
            return handler(parts[1:])
        except PendingMatchesException as e:
            return f"Cannot advance: {e.pending_count} matches are still pending"
        except SwissCutException as e:
            return f"Error: {e}"

    def _require_tournament(self) -> Tournament:
        if self.tournament is None:
            raise SwissCutException("No tournament is running, use start first")
        return self.tournament

    # --- Registration ---

    def _add(self, args: List[str]) -> str:
        if self.tournament is not None:
            return "Registration is closed while a tournament is running"
        player = engine.register_player(self.roster, " ".join(args))
        return f"Registered {player.name} (#{player.registration_order}, id {player.id})"

    def _remove(self, args: List[str]) -> str:
        if self.tournament is not None:
            return "Registration is closed while a tournament is running"
        if not args:
            return "Usage: remove <player id>"
        player = engine.remove_player(self.roster, args[0])
        return f"Removed {player.name}"

    def _players(self, args: List[str]) -> str:
        players = (
            self.tournament.player_list()
            if self.tournament is not None
            else self.roster.get_player_list()
        )
        if not players:
            return "No players registered"
        return "\n".join(f"{p.registration_order:>3}  {p.name}  ({p.id})" for p in players)

    def _config(self, args: List[str]) -> str:
        try:
            parsed = create_config_parser().parse_args(args)
        except SystemExit:
            return "Usage: " + COMMANDS["config"]
        self.options.update(
            {key: value for key, value in vars(parsed).items() if value not in (None, False)}
        )
        return f"Options: {self.options}"

    def _build_config(self) -> TournamentConfig:
        overrides = {}
        if "rounds" in self.options:
            overrides["total_swiss_rounds"] = self.options["rounds"]
        if "top_cut" in self.options:
            overrides["top_cut_size"] = self.options["top_cut"]
        if "groups" in self.options:
            overrides["group_count"] = self.options["groups"]
        if "minutes" in self.options:
            overrides["round_duration_seconds"] = int(self.options["minutes"]) * 60
        if self.options.get("timer"):
            overrides["use_timer"] = True
        if "name" in self.options:
            overrides["name"] = self.options["name"]
        return TournamentConfig.suggested(len(self.roster), **overrides)

    def _start(self, args: List[str]) -> str:
        if self.tournament is not None:
            return "A tournament is already running"
        self.tournament = engine.start_tournament(
            self.roster.get_player_list(), self._build_config(), rng=self.rng
        )
        return f"Tournament started.\n{self._pending([])}"

    # --- Rounds and results ---

    def _pending(self, args: List[str]) -> str:
        tournament = self._require_tournament()
        matches = engine.pending_matches(tournament)
        if not matches:
            return f"{engine.stage_label(tournament)}: all matches completed"
        lines = [f"{engine.stage_label(tournament)}:"]
        for table, match in enumerate(matches, start=1):
            lines.append(f"  {table:>2}. {format_match(tournament, match)}  [{match.id}]")
        return "\n".join(lines)

    def _resolve_match_id(self, reference: str) -> str:
        if reference.isdigit():
            matches = engine.pending_matches(self._require_tournament())
            index = int(reference) - 1
            if 0 <= index < len(matches):
                return matches[index].id
        return reference

    def _result(self, args: List[str]) -> str:
        tournament = self._require_tournament()
        if len(args) != 3:
            return "Usage: " + COMMANDS["result"]
        try:
            score1, score2 = int(args[1]), int(args[2])
        except ValueError:
            return "Scores must be whole numbers"
        match_id = self._resolve_match_id(args[0])
        self.tournament = engine.submit_match_result(
            tournament, match_id, score1, score2
        )
        return format_match(self.tournament, self.tournament.get_match(match_id))

    def _next(self, args: List[str]) -> str:
        self.tournament = engine.advance_round(self._require_tournament(), rng=self.rng)
        return f"Now playing: {engine.stage_label(self.tournament)}"

    def _timer(self, args: List[str]) -> str:
        self.tournament = engine.start_round_timer(self._require_tournament())
        minutes = self.tournament.round_duration_seconds // 60
        return f"Timer started: {minutes} minutes"

    def _free(self, args: List[str]) -> str:
        self.tournament = engine.enable_free_time(self._require_tournament())
        return "Free time: no overtime penalty this round"

    # --- Views ---

    def _standings(self, args: List[str]) -> str:
        return format_standings(self._require_tournament())

    def _bracket(self, args: List[str]) -> str:
        return format_bracket(self._require_tournament())

    def _qualification(self, args: List[str]) -> str:
        tournament = self._require_tournament()
        marks = engine.get_qualification_map(tournament)
        if not marks:
            return "No projection available"
        return "\n".join(
            f"{tournament.get_player(pid).name}: {mark.value}"
            for pid, mark in marks.items()
        )

    def _end(self, args: List[str]) -> str:
        self.tournament = engine.end_tournament(self.tournament)
        return "Tournament ended"

    def _help(self, args: List[str]) -> str:
        return "\n".join(f"  {cmd:15} - {desc}" for cmd, desc in COMMANDS.items())


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for the desk."""
    completions: Dict[str, Optional[dict]] = {}
    for cmd in COMMANDS:
        completions[cmd] = None
        completions[f"/{cmd}"] = None
    completions["config"] = {
        "--rounds": None,
        "--top-cut": {"2": None, "4": None, "8": None},
        "--groups": None,
        "--minutes": None,
        "--timer": None,
        "--name": None,
    }
    return NestedCompleter.from_nested_dict(completions)


def run_desk(args: argparse.Namespace) -> int:
    """Run the interactive organizer desk."""
    print(f"{Colors.OKBLUE}{Colors.BOLD}SwissCut desk{Colors.ENDC}")
    print(f"Type {Colors.BOLD}help{Colors.ENDC} to see all available commands\n")

    desk = DeskSession()
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )

    while True:
        try:
            user_input = session.prompt("swisscut> ").strip()
            if user_input in ["exit", "quit", "q"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break
            output = desk.execute(user_input)
            if output:
                print(output)
        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def run_simulate(args: argparse.Namespace) -> int:
    """Simulate a random tournament and print the outcome."""
    config = SimulationConfig(
        num_players=args.players,
        total_swiss_rounds=args.rounds,
        top_cut_size=args.top_cut,
        group_count=args.groups,
        overtime_rate=args.overtime_rate,
        seed=args.seed,
    )
    result = TournamentSimulator(config).run(stop_after_swiss=args.swiss_only)
    tournament = result.tournament

    print(f"\n{Colors.BOLD}Standings{Colors.ENDC}")
    print(format_standings(tournament))
    print(f"\n{Colors.BOLD}Bracket{Colors.ENDC}")
    print(format_bracket(tournament))
    return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="swisscut",
        description="Swiss qualification and top cut tournament engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive organizer desk
  swisscut

  # Simulate a 13 player event with two groups
  swisscut simulate --players 13 --groups 2 --seed 7
        """,
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    desk_parser = subparsers.add_parser("desk", help="Interactive organizer desk")
    desk_parser.set_defaults(func=run_desk)

    sim_parser = subparsers.add_parser("simulate", help="Simulate a random tournament")
    sim_parser.add_argument("--players", type=int, default=12)
    sim_parser.add_argument("--rounds", type=int)
    sim_parser.add_argument("--top-cut", type=int, choices=[2, 4, 8])
    sim_parser.add_argument("--groups", type=int)
    sim_parser.add_argument("--overtime-rate", type=float, default=0.0)
    sim_parser.add_argument("--seed", type=int)
    sim_parser.add_argument("--swiss-only", action="store_true")
    sim_parser.set_defaults(func=run_simulate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the swisscut CLI."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("swisscut").setLevel(logging.DEBUG)

    if not hasattr(args, "func"):
        return run_desk(args)

    try:
        return args.func(args)
    except SwissCutException as e:
        logger.error("Command failed: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
