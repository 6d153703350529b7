"""
simulate.py

Build a universe from settings and run it, printing every generation as rows
of state values.

Example (1-D)
-------
python simulate.py --rule 90 --shape 31 --iterations 15

Example (2-D)
-------
python simulate.py --rule-kind totalistic2d --rule 000100000001100000 \
       --shape 8 8 --iterations 4 --initial random --seed 7

Example (YAML)
-------
python simulate.py --config simulation.yaml --log logs/runs.log
"""

from __future__ import annotations
import argparse, pathlib, sys
from typing import List, Optional, Sequence

from ca import Transition
from cell import Cell
from clock import build_time
from config import SimulationConfig, load_config
from errors import SimulationError
from generate import InitialConditionGenerator, single_seed
from neighborhood import moore, von_neumann
from rules import ElementaryRule, Rule1D, Rule2D
from run_logger import log_run
from space import Space
from universe import Universe


def build_rule_table(config: SimulationConfig) -> List[Transition]:
    if config.rule_kind == "elementary":
        return ElementaryRule(config.rule).transitions()
    if config.rule_kind == "totalistic1d":
        neighbors = 2 * config.radius
        if isinstance(config.rule, str):
            return Rule1D(config.rule, neighbor_count=neighbors).transitions()
        return Rule1D.from_int(config.rule, neighbor_count=neighbors).transitions()
    neighbors = 8 if config.neighborhood == "moore" else 4
    if isinstance(config.rule, str):
        return Rule2D(config.rule, neighbor_count=neighbors).transitions()
    return Rule2D.from_int(config.rule, neighbor_count=neighbors).transitions()


def build_universe(config: SimulationConfig) -> Universe:
    rules = build_rule_table(config)
    time = build_time(config.iterations, config.shape)
    if config.initial == "single":
        initial = single_seed(config.shape, rules)
    else:
        gen = InitialConditionGenerator(config.shape, seed=config.seed, density=config.density)
        initial = gen.generate(rules)
    shape_of = moore if config.neighborhood == "moore" else von_neumann
    offsets = shape_of(config.dimensions, radius=config.radius)
    space = Space(time, initial, keep_history=config.keep_history, offsets=offsets)
    return Universe(time, space)


def to_values(generation: Sequence) -> list:
    """Nested list of state values for a generation (or any nested block of cells)."""
    if isinstance(generation, Cell):
        return generation.state.value
    return [to_values(child) for child in generation]


def format_generation(generation: Sequence) -> str:
    values = to_values(generation)
    if values and isinstance(values[0], list):
        return "\n".join("".join(map(str, row)) for row in values)
    return "".join(map(str, values))


def simulate(config: SimulationConfig, max_steps: Optional[int] = None) -> Universe:
    """
    Build and run a universe. `max_steps` caps the number of cells computed,
    which is the only way an unbounded run stops.
    """
    if config.iterations is None and max_steps is None:
        raise ValueError("an unbounded run needs max_steps")
    universe = build_universe(config)
    if max_steps is None:
        universe.run()
    else:
        universe.run(until=lambda u: u.space.events.cells_created >= max_steps)
    return universe


def _parse_rule(text: str):
    try:
        return int(text)
    except ValueError:
        return text


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Run an N-dimensional cellular automaton.")

    p.add_argument("--config", type=pathlib.Path, help="YAML settings file; overrides the flags below.")
    p.add_argument("--rule-kind", choices=["elementary", "totalistic1d", "totalistic2d"], default="elementary")
    p.add_argument("--rule", type=_parse_rule, default=30, help="Rule code (int) or bit string.")
    p.add_argument("--shape", type=int, nargs="+", default=[64], help="Lattice size per dimension.")
    p.add_argument("--iterations", type=int, default=32, help="Generations to compute; 0 for unbounded.")
    p.add_argument("--initial", choices=["single", "random"], default="single")
    p.add_argument("--density", type=float, default=0.5, help="Probability a cell starts alive (random initial).")
    p.add_argument("--seed", type=int, default=42, help="RNG seed for reproducibility.")
    p.add_argument("--neighborhood", choices=["moore", "von_neumann"], default="moore")
    p.add_argument("--radius", type=int, default=1, help="Neighborhood radius (totalistic1d only).")
    p.add_argument("--no-history", action="store_true", help="Keep only the latest generation.")
    p.add_argument("--max-steps", type=int, default=None, help="Stop after this many cells.")
    p.add_argument("--quiet", action="store_true", help="Only print the summary line.")
    p.add_argument("--log", type=pathlib.Path, default=None, help="Append a JSONL record of the run here.")
    return p


def _config_from_args(args: argparse.Namespace) -> SimulationConfig:
    if args.config is not None:
        return load_config(args.config)
    return SimulationConfig(
        rule_kind=args.rule_kind,
        rule=args.rule,
        shape=tuple(args.shape),
        iterations=args.iterations or None,
        keep_history=not args.no_history,
        initial=args.initial,
        density=args.density,
        seed=args.seed,
        neighborhood=args.neighborhood,
        radius=args.radius,
    )


def main(argv: List[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        config = _config_from_args(args)
        universe = simulate(config, max_steps=args.max_steps)
    except (ValueError, SimulationError) as e:
        print(f"[error] rejected configuration: {e}", file=sys.stderr)
        sys.exit(1)

    space = universe.space
    if not args.quiet:
        print(format_generation(space.initial))
        if space.keep_history:
            generations = space.history
        else:
            generations = (space.last,) if space.events.generations_completed else ()
        for generation in generations:
            if config.dimensions > 1:
                print()
            print(format_generation(generation))

    status = "complete" if universe.complete else "stopped"
    if not universe.complete and not isinstance(space.current, tuple):
        print("[warning] last generation is incomplete", file=sys.stderr)
    print(f"Simulation {status}: {space.events.generations_completed:,} generations, {space.events.cells_created:,} cells")

    if args.log is not None:
        log_run(
            config.to_dict(),
            {
                "status": status,
                "generations": space.events.generations_completed,
                "cells": space.events.cells_created,
            },
            log_file=args.log,
        )


if __name__ == "__main__":
    main()
