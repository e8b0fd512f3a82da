import argparse
import time
from pathlib import Path

from route_ga.data import load_instance, load_tsplib_instances, random_instance
from route_ga.evaluation import report, truncate
from route_ga.evolutionary import EvolutionConfig, Evolver
from route_ga.genetics import CrossoverType


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def build_config(args) -> EvolutionConfig:
    return EvolutionConfig(
        population_size=args.population,
        elitism=args.elitism,
        mutation_rate=args.mutation_rate,
        elite_mutation_rate=args.elite_mutation_rate,
        mutate_elites=args.mutate_elites,
        crossover_type=args.crossover,
        max_mutation_retries=args.max_retries,
        random_seed=args.seed,
    )


def run(args) -> None:
    t0 = time.perf_counter()
    if args.tsplib:
        log(f"loading instance from {args.tsplib}")
        instance = load_instance(Path(args.tsplib))
    else:
        instance = random_instance(args.cities, seed=args.seed)
    log(f"instance {instance.name}: {instance.dimension} locations, optimum={instance.optimum}")

    cfg = build_config(args)
    evolver = Evolver(instance.locations, cfg)
    log(
        f"population={cfg.population_size} elitism={cfg.elitism} "
        f"crossover={cfg.crossover_type.value} mutation_rate={cfg.mutation_rate}"
    )

    best_gen = None
    try:
        for _ in range(args.generations):
            evolver.step()
            best = evolver.all_time_best
            if best.generation != best_gen:
                best_gen = best.generation
                log(f"new best at gen {best_gen}: distance={truncate(best.distance())}")
            if args.report_every and evolver.generation % args.report_every == 0:
                log(report(evolver, instance).summary())
    except KeyboardInterrupt:
        print("Interrupted.")
    if evolver.current_best is None:
        log("no generation evaluated")
        return
    final = report(evolver, instance)
    log(final.summary())
    route = " ".join(str(n) for n in instance.to_nodes(evolver.all_time_best.genes))
    log(f"best route: {route}")
    log(f"finished in {time.perf_counter() - t0:.2f}s")


def instances(args) -> None:
    data_root = Path(args.data_root)
    found = load_tsplib_instances(data_root, max_nodes=args.max_nodes, max_instances=args.max_instances)
    if not found:
        raise RuntimeError(
            f"No TSPLIB instances found in {data_root}. "
            "Place .tsp (and optional .opt.tour) files there before running."
        )
    for inst in found:
        print(f"{inst.name}: dimension={inst.dimension} optimum={inst.optimum}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Route GA CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Evolve a route over random or TSPLIB locations")
    run_parser.add_argument("--tsplib", default=None, help="Path to a .tsp file with node coordinates")
    run_parser.add_argument("--cities", type=int, default=30)
    run_parser.add_argument("--generations", type=int, default=500)
    run_parser.add_argument("--population", type=int, default=100)
    run_parser.add_argument("--elitism", type=int, default=2)
    run_parser.add_argument("--mutation-rate", type=float, default=0.01)
    run_parser.add_argument("--elite-mutation-rate", type=float, default=0.005)
    run_parser.add_argument("--mutate-elites", action="store_true")
    run_parser.add_argument(
        "--crossover", choices=[c.value for c in CrossoverType], default=CrossoverType.ERX.value
    )
    run_parser.add_argument("--max-retries", type=int, default=10)
    run_parser.add_argument("--seed", type=int, default=123)
    run_parser.add_argument("--report-every", type=int, default=50)
    run_parser.set_defaults(func=run)

    inst_parser = subparsers.add_parser("instances", help="List TSPLIB instances in a directory")
    inst_parser.add_argument("--data-root", default="data/tsplib")
    inst_parser.add_argument("--max-nodes", type=int, default=None)
    inst_parser.add_argument("--max-instances", type=int, default=None)
    inst_parser.set_defaults(func=instances)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
