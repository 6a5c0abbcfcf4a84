"""Entry point: ``python -m conquest``.

Supports two modes:
  - ``python -m conquest``          → Launch the FastAPI server for a renderer
  - ``python -m conquest cli``      → Headless run with AI empires only
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Territory Conquest Simulation")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI game server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--save", type=str, default="savegame.json")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless game for a fixed amount of simulated time")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--seconds", type=float, default=300.0, help="Simulated seconds to run")
    cli.add_argument("--speed", type=float, default=4.0)
    cli.add_argument("--step", type=float, default=0.25, help="Wall-clock seconds per tick")
    cli.add_argument("--save", type=str, default="savegame.json")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from conquest.api.app import create_app
    from conquest.config import GameConfig

    config = GameConfig(world_seed=args.seed, snapshot_file=args.save, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from conquest.config import GameConfig
    from conquest.core.commands import SetSpeed
    from conquest.core.enums import GamePhase
    from conquest.core.roster import HUMAN_EMPIRE_ID
    from conquest.engine.simulation import Simulation
    from conquest.persistence.codec import save_snapshot
    from conquest.utils.logging import setup_logging

    config = GameConfig(world_seed=args.seed, snapshot_file=args.save, log_level=args.log_level)
    setup_logging(config.log_level)

    # Simulated clock: ticks are driven with synthetic wall times.
    now = 0.0
    sim = Simulation.new_game(config, now=now)
    sim.apply(SetSpeed(HUMAN_EMPIRE_ID, args.speed), now=now)
    logger.info("=== Headless game started (seed=%d, speed=%.1fx) ===", args.seed, sim.state.game_speed)

    while sim.state.game_time < args.seconds and sim.state.phase == GamePhase.PLAYING:
        now += args.step
        sim.tick(now)
        if sim.state.tick % 100 == 0:
            leader = max(sim.state.empires, key=lambda e: len(e.territories))
            logger.info("Tick %d (t=%.0fs): leader %s with %d tiles",
                        sim.state.tick, sim.state.game_time, leader.name, len(leader.territories))

    state = sim.state
    logger.info("=== Finished at t=%.1fs, phase=%s, winner=%s ===",
                state.game_time, state.phase.value, state.winner)
    for empire in sorted(state.empires, key=lambda e: len(e.territories), reverse=True):
        print(f"{empire.name:<20} tiles={len(empire.territories):>4} "
              f"gold={empire.resources.gold:>8.1f} pop={empire.resources.population:>6.1f}/"
              f"{empire.resources.max_population:<5.0f} buildings={len(empire.buildings)}")
    save_snapshot(state, config.snapshot_file)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])
    if args.command == "serve":
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
