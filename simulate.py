#!/usr/bin/env python3
"""
Scenario Brain - terminal front-end

Feed a scenario to the multi-region simulation and compare the result with
the single-voice baseline:

- Eight regions react in turn, each with an activity bar
- A running consciousness stream and step timeline
- Integrative summary vs. baseline narrative

Run with:
    python simulate.py                          # interactive
    python simulate.py --scenario "A hooded figure approaches..."
    python simulate.py --profile persona.json --pace
"""

import argparse
import logging
import os
import sys
from typing import Optional

import numpy as np

from scenario_brain import (
    COMPLETE_MESSAGE,
    REGION_SEQUENCE,
    PipelineOrchestrator,
    Profile,
    ProfileImportError,
    ProfilePersistence,
    ScenarioRejectedError,
    SimulationConfig,
    SimulationReport,
    StageOutcome,
    describe_persona,
    randomize_profile,
)

logger = logging.getLogger("scenario_brain.cli")


class Colors:
    """ANSI color codes for terminal output"""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    MAGENTA = '\033[95m'
    CYAN = '\033[96m'
    WHITE = '\033[97m'


def clear_screen():
    """Clear terminal screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def make_bar(value: float, width: int = 20, filled: str = '█', empty: str = '░') -> str:
    """Create a progress bar for a 0-1 value"""
    value = max(0.0, min(1.0, value))
    filled_count = int(value * width)
    return filled * filled_count + empty * (width - filled_count)


def colorize_activity(activity: float) -> str:
    """Color an activity level (0-100)"""
    if activity > 70:
        return Colors.RED
    elif activity > 50:
        return Colors.YELLOW
    elif activity > 30:
        return Colors.GREEN
    else:
        return Colors.CYAN


def print_status(message: str, color: str = Colors.DIM) -> None:
    print(f"{color}{message}{Colors.RESET}")


def print_profile(profile: Profile) -> None:
    """Print the persona panel"""
    print(f"\n{Colors.BOLD}Persona:{Colors.RESET}")
    print(f"  {describe_persona(profile)}")
    for trait, value in profile.big_five.items():
        print(f"    {trait:18} [{make_bar(value / 100, width=15)}] {value:g}")
    print()


def print_stage(outcome: StageOutcome) -> None:
    """Print one region card as it completes"""
    result = outcome.result
    color = colorize_activity(result.activity)
    bar = make_bar(result.activity / 100)
    print(f"{Colors.BOLD}Step {outcome.step}: {outcome.region.display_name}{Colors.RESET}")
    print(f"  {color}[{bar}]{Colors.RESET} {result.activity:5.1f}%  {Colors.DIM}{result.highlight}{Colors.RESET}")
    print(f"  {result.message}")


def print_idle_regions() -> None:
    print(f"\n{Colors.BOLD}Brain Regions:{Colors.RESET}")
    for region in REGION_SEQUENCE:
        print(f"  {region.display_name:20} {Colors.DIM}{region.idle_text}{Colors.RESET}")
    print()


def print_history(report: Optional[SimulationReport]) -> None:
    """Print the decaying activity history as a table"""
    if report is None or not report.history:
        print_status("No activity recorded yet. Run a scenario first.\n")
        return
    matrix = np.array([[snap.snapshot[r.value] for r in REGION_SEQUENCE] for snap in report.history])
    header = ''.join(f"{r.value[:6]:>8}" for r in REGION_SEQUENCE)
    print(f"\n{Colors.BOLD}Activity History:{Colors.RESET}")
    print(f"  step{header}")
    for step, row in enumerate(matrix, start=1):
        cells = ''.join(f"{v:8.1f}" for v in row)
        print(f"  {step:4}{cells}")
    print()


def print_exports(persistence: ProfilePersistence) -> None:
    """Print the exported personas, newest first"""
    exports = persistence.list_exports()
    if not exports:
        print_status(f"No exported personas in {persistence.export_directory}.\n")
        return
    print(f"\n{Colors.BOLD}Exported Personas:{Colors.RESET}")
    for entry in exports:
        print(f"  {Colors.CYAN}{entry['path']}{Colors.RESET}  {Colors.DIM}{entry['exported_at']}{Colors.RESET}")
        print(f"    {entry['summary']}")
    print()


def print_report(report: SimulationReport) -> None:
    """Print the stream, integrative summary and baseline comparison"""
    print(f"\n{Colors.BOLD}{'=' * 60}{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.CYAN}  CONSCIOUSNESS STREAM{Colors.RESET}")
    print(f"{Colors.BOLD}{'=' * 60}{Colors.RESET}")
    for entry in report.stream:
        print(f"  {Colors.BOLD}{entry.author}{Colors.RESET}: {entry.message}")

    print(f"\n{Colors.BOLD}Timeline:{Colors.RESET}")
    for event in report.timeline:
        color = colorize_activity(event.activity)
        print(f"  {event.step}. {event.region_name:20} {color}{event.activity:5.1f}%{Colors.RESET}  "
              f"{Colors.DIM}{event.highlight}{Colors.RESET}")

    print(f"\n{Colors.MAGENTA}{Colors.BOLD}Baseline voice:{Colors.RESET} {report.baseline}")
    context = report.context
    print(f"{Colors.DIM}  [Alarm: {context.emotional_alarm:.2f} | Mood: {context.mood_score:+.2f} "
          f"| Environment: {report.features.environment}]{Colors.RESET}")
    print_status(f"\n{report.status}\n", Colors.GREEN)


def run_scenario(scenario: str, profile: Profile, config: SimulationConfig) -> Optional[SimulationReport]:
    """Run one scenario; returns None when the scenario is rejected"""
    try:
        orchestrator = PipelineOrchestrator(scenario, profile, config=config, on_stage=print_stage)
    except ScenarioRejectedError as e:
        print_status(f"{e.status}\n", Colors.YELLOW)
        return None

    print_status(orchestrator.status)
    report = orchestrator.run()
    print_report(report)
    return report


def print_help():
    """Print help information"""
    print(f"""
{Colors.BOLD}Scenario Brain - Commands{Colors.RESET}

  {Colors.CYAN}/profile{Colors.RESET}          - Show the current persona
  {Colors.CYAN}/randomize{Colors.RESET}        - Roll a random persona
  {Colors.CYAN}/load <file>{Colors.RESET}      - Import a persona from a JSON export
  {Colors.CYAN}/export [file]{Colors.RESET}    - Export the persona as JSON
  {Colors.CYAN}/profiles{Colors.RESET}         - List exported personas
  {Colors.CYAN}/regions{Colors.RESET}          - Show the regions in processing order
  {Colors.CYAN}/history{Colors.RESET}          - Show the last run's activity history
  {Colors.CYAN}/clear{Colors.RESET}            - Clear the screen
  {Colors.CYAN}/help{Colors.RESET}             - Show this help
  {Colors.CYAN}/quit{Colors.RESET}             - Exit

Anything else is treated as a scenario to simulate.
""")


def interactive(profile: Profile, config: SimulationConfig, persistence: ProfilePersistence,
                rng: np.random.Generator) -> None:
    """Main interactive loop"""
    print(f"""
{Colors.BOLD}{Colors.CYAN}
+===========================================================+
|                                                           |
|   SCENARIO BRAIN                                          |
|                                                           |
|   Eight regions, one scenario, one baseline voice.        |
|                                                           |
+===========================================================+
{Colors.RESET}
Type {Colors.CYAN}/help{Colors.RESET} for commands, or describe a situation.
""")
    print_profile(profile)
    last_report: Optional[SimulationReport] = None

    while True:
        try:
            user_input = input(f"{Colors.GREEN}Scenario:{Colors.RESET} ").strip()

            if user_input.startswith('/'):
                parts = user_input.split(maxsplit=1)
                cmd = parts[0].lower()
                arg = parts[1].strip() if len(parts) > 1 else ''

                if cmd in ['/quit', '/exit', '/q']:
                    print(f"\n{Colors.CYAN}Shutting down.{Colors.RESET}")
                    break

                elif cmd == '/profile':
                    print_profile(profile)

                elif cmd == '/randomize':
                    profile = randomize_profile(rng)
                    print_status("Persona randomized. Adjust sliders or run the simulation.", Colors.GREEN)
                    print_profile(profile)

                elif cmd == '/load':
                    if not arg:
                        print(f"{Colors.RED}Usage: /load <file>{Colors.RESET}\n")
                        continue
                    profile = persistence.load(arg)
                    print_status(f"Persona loaded from {arg}.", Colors.GREEN)
                    print_profile(profile)

                elif cmd == '/export':
                    path = persistence.export(profile, arg or None)
                    print_status(f"Profile exported as JSON file for reuse. ({path})\n", Colors.GREEN)

                elif cmd == '/profiles':
                    print_exports(persistence)

                elif cmd == '/regions':
                    print_idle_regions()

                elif cmd == '/history':
                    print_history(last_report)

                elif cmd == '/clear':
                    clear_screen()

                elif cmd == '/help':
                    print_help()

                else:
                    print(f"{Colors.RED}Unknown command. Type /help for available commands.{Colors.RESET}\n")

            else:
                report = run_scenario(user_input, profile, config)
                if report is not None:
                    last_report = report

        except KeyboardInterrupt:
            print(f"\n\n{Colors.CYAN}Interrupted. Use /quit to exit properly.{Colors.RESET}\n")

        except EOFError:
            break

        except (ProfileImportError, FileNotFoundError, OSError) as e:
            print(f"{Colors.RED}Error: {e}{Colors.RESET}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Multi-region scenario simulation")
    parser.add_argument("--scenario", "-s", type=str, help="Run a single scenario and exit")
    parser.add_argument("--profile", "-p", type=str, help="Import a persona from a JSON export")
    parser.add_argument("--randomize", action="store_true", help="Start from a random persona")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random persona")
    parser.add_argument("--export", nargs='?', const='', default=None, metavar="FILE",
                        help="Export the persona as JSON (default name in the export directory)")
    parser.add_argument("--pace", action="store_true", help="Pause between stages like a live run")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = SimulationConfig.from_env()
    if args.pace:
        config.pace = True
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    persistence = ProfilePersistence(config.export_directory)
    rng = np.random.default_rng(args.seed)

    try:
        if args.profile:
            profile = persistence.load(args.profile)
        elif args.randomize:
            profile = randomize_profile(rng)
        else:
            profile = Profile()
    except (ProfileImportError, FileNotFoundError) as e:
        print(f"{Colors.RED}Error: {e}{Colors.RESET}")
        return 2

    if args.export is not None:
        path = persistence.export(profile, args.export or None)
        print_status(f"Profile exported as JSON file for reuse. ({path})", Colors.GREEN)

    if args.scenario is not None:
        print_profile(profile)
        report = run_scenario(args.scenario, profile, config)
        return 0 if report is not None and report.status == COMPLETE_MESSAGE else 1

    if args.export is not None:
        return 0

    interactive(profile, config, persistence, rng)
    return 0


if __name__ == '__main__':
    sys.exit(main())
