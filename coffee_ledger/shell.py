#!/usr/bin/env python3
"""
shell.py - Interactive Proof-of-Coffee Simulator

Terminal front end for the coffee ledger. It reads menu choices and coffee
labels, calls one Ledger operation per command and renders the result.
All game rules live in the ledger; this module only formats text.

Run:
    python -m coffee_ledger               # Interactive session
    python -m coffee_ledger --seed 42     # Reproducible rarity rolls
    python -m coffee_ledger --verbose     # Also print the ledger's own receipts
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
import sys

from .core import Session, Transaction, BrewResult
from .achievements import Achievement
from .ledger import Ledger
from .randomness_source import NumpyRandomnessSource
from .rarity import RarityReport


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class ShellConfig:
    """Options for an interactive session."""
    # Number of brews shown by "Show Recent Brews"
    recent_count: int = 5
    # Seed for the rarity/hash randomness (None = fresh entropy every run)
    seed: Optional[int] = None
    # Let the ledger print its own receipts as well
    verbose: bool = False


def parse_args(argv: Sequence[str]) -> ShellConfig:
    """
    Build a ShellConfig from command line flags.

    Recognised flags: --seed N, --recent N, --verbose. Unknown flags are ignored.
    """
    config = ShellConfig()
    args = list(argv)
    config.verbose = "--verbose" in args
    for flag in ("--seed", "--recent"):
        if flag in args:
            index = args.index(flag)
            if index + 1 >= len(args):
                raise ValueError(f"{flag} needs a value")
            try:
                value = int(args[index + 1])
            except ValueError:
                raise ValueError(f"{flag} expects an integer, got {args[index + 1]!r}") from None
            if flag == "--seed":
                if value < 0:
                    raise ValueError(f"--seed expects a non-negative integer, got {value}")
                config.seed = value
            else:
                config.recent_count = value
    return config


# ============================================================================
# RENDERING
# ============================================================================

MENU = """
1. Drink Coffee
2. Show Recent Brews
3. Show Coffee Ledger
4. Achievements
5. Balance
6. Luck Report
7. Switch User
8. Exit"""


def format_transaction(tx: Transaction) -> str:
    """One-line view of a transaction."""
    return (f"{tx.rarity.icon} ID: {tx.id}, Type: {tx.coffee_label}, Rarity: {tx.rarity}, "
            f"Brewer: {tx.brewer}, Timestamp: {tx.timestamp}, Hash: {tx.proof_hash}")


def format_brew_result(result: BrewResult) -> str:
    tx = result.transaction
    lines = [
        "",
        "Brewing your coffee... ☕",
        f"Transaction ID: {tx.id}",
        f"Type: {tx.coffee_label}",
        f"Rarity: {tx.rarity.icon} {tx.rarity}",
        f"Timestamp: {tx.timestamp}",
        f"Hash: {tx.proof_hash}",
        f"Reward: +{result.reward_credited} coins",
    ]
    for achievement in result.unlocked_achievements:
        lines.append(f"🏆 Achievement unlocked: {achievement.name} - "
                     f"{achievement.description} (+{achievement.reward} coins)")
    lines.append(f"Balance: {result.balance_after} coins")
    return "\n".join(lines)


def format_achievements(achievements: List[Achievement]) -> str:
    lines = ["", "=== Achievements ==="]
    for a in achievements:
        mark = "🏆" if a.unlocked else "🔒"
        lines.append(f"{mark} {a.name} [{a.key}] - {a.description} (+{a.reward} coins)")
    lines.append("====================")
    return "\n".join(lines)


def format_rarity_report(report: RarityReport, brewer: str) -> str:
    lines = ["", f"=== Luck Report: {brewer} ==="]
    if report.total == 0:
        lines.append("No brews yet.")
    else:
        for tier, count in report.counts.items():
            lines.append(f"{tier.icon} {str(tier):<10} {count:>5}  "
                         f"({report.share(tier):6.1%}, expected {report.expected[tier]:.1f})")
        lines.append(f"chi2 = {report.chi2:.3f}, p = {report.p_value:.3f}")
    lines.append("=" * (len(lines[1])))
    return "\n".join(lines)


# ============================================================================
# SHELL
# ============================================================================

class CoffeeShell:
    """
    Menu loop around a Ledger.

    Input and output are injectable so the loop can be driven by tests.
    Invalid menu choices are reported and re-prompted; they never reach the ledger.
    """

    def __init__(
        self,
        ledger: Ledger,
        config: Optional[ShellConfig] = None,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self.ledger = ledger
        self.config = config or ShellConfig()
        self._input = input_fn
        self._output = output_fn
        self.session: Optional[Session] = None

    def prompt_user(self) -> Session:
        name = self._input("Enter your barista name (blank for Anonymous): ").strip()
        self.session = self.ledger.set_user(name)
        self._output(f"Hello, {self.session.brewer}! "
                     f"Balance: {self.ledger.balance_of(self.session.brewer)} coins")
        return self.session

    def drink_coffee(self) -> BrewResult:
        self._output("Enter your coffee type (e.g., Espresso, Latte):")
        label = self._input("").strip()
        result = self.ledger.brew(self.session, label)
        self._output(format_brew_result(result))
        self._output("Successfully logged your coffee transaction!")
        return result

    def show_recent(self):
        recent = self.ledger.recent_transactions(self.config.recent_count)
        self._output(f"\n=== Last {len(recent)} Brews ===")
        for tx in recent:
            self._output(format_transaction(tx))

    def show_ledger(self):
        self._output("\n=== Coffee Ledger ===")
        for tx in self.ledger.all_transactions():
            self._output(format_transaction(tx))
        self._output("======================")

    def show_achievements(self):
        self._output(format_achievements(self.ledger.all_achievements()))

    def show_balance(self):
        brewer = self.session.brewer
        self._output(f"{brewer}'s balance: {self.ledger.balance_of(brewer)} coins")

    def show_luck(self):
        brewer = self.session.brewer
        self._output(format_rarity_report(self.ledger.rarity_report(brewer), brewer))

    def handle(self, choice: str) -> bool:
        """
        Run one menu command.

        Commands that need a brewer ask for one first if no session is open.

        Returns:
            False when the user chose to exit, True otherwise
        """
        commands = {
            "1": self.drink_coffee,
            "2": self.show_recent,
            "3": self.show_ledger,
            "4": self.show_achievements,
            "5": self.show_balance,
            "6": self.show_luck,
            "7": self.prompt_user,
        }
        choice = choice.strip()
        if choice == "8":
            self._output("Exiting Proof-of-Coffee Simulator. Goodbye!")
            return False
        command = commands.get(choice)
        if command is None:
            self._output("Invalid option. Please try again.")
            return True
        if self.session is None and choice != "7":
            self.prompt_user()
        command()
        return True

    def run(self):
        self._output("Welcome to the Proof-of-Coffee Simulator!")
        try:
            self.prompt_user()
            while True:
                self._output(MENU)
                if not self.handle(self._input("")):
                    break
        except EOFError:
            self._output("\nExiting Proof-of-Coffee Simulator. Goodbye!")


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    ledger = Ledger(
        "proof-of-coffee",
        randomness=NumpyRandomnessSource(config.seed),
        verbose=config.verbose,
    )
    CoffeeShell(ledger, config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
