import argparse
import logging
import time

from leapgrav import ConfigError, NBodySimulation, SimConfig, status_lines

"""
This script runs the simulation headless from the command line. The main function builds a randomized system from the given body count and seed, advances it a fixed number of leapfrog steps, prints the elapsed-year and energy lines every report interval, and optionally writes the per-step energy history to CSV. It is the command-line stand-in for the frame loop of a graphical host and uses the same NBodySimulation interface.

"""


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(description="Leapfrog N-body simulation with a one light-year force cutoff.")
	p.add_argument("--bodies", type=int, default=SimConfig.n_bodies, help="number of bodies")
	p.add_argument("--steps", type=int, default=100, help="number of integration steps")
	p.add_argument("--seed", type=int, default=None, help="random seed for the initial conditions")
	p.add_argument("--report-every", type=int, default=10, help="print status every N steps (0 disables)")
	p.add_argument("--csv", default=None, help="write the energy history to this CSV file")
	p.add_argument("--workers", type=int, default=1, help="threads for the force evaluation")
	p.add_argument("--float64", action="store_true", help="store body state in double precision")
	p.add_argument("--verbose", action="store_true", help="log debug output")
	return p


def main(argv=None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.INFO,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)

	cfg = SimConfig(
		n_bodies=args.bodies,
		seed=args.seed,
		n_workers=args.workers,
		dtype="float64" if args.float64 else "float32",
		record_history=args.csv is not None,
	)
	try:
		cfg.validate()
	except ConfigError as e:
		parser.error(str(e))

	with NBodySimulation.random(args.bodies, seed=args.seed, config=cfg) as sim:
		print(f"Running {sim.n_bodies} bodies for {args.steps} steps (dt={sim.dt:.2E} s)")
		t0 = time.perf_counter()
		for k in range(1, args.steps + 1):
			sim.step()
			if args.report_every and k % args.report_every == 0:
				print(f"[step {k}]")
				for line in status_lines(sim.snapshot()):
					print(f"  {line}")
		elapsed = time.perf_counter() - t0
		print(f"Completed {args.steps} steps in {elapsed:.2f} s")

		if args.csv is not None:
			n = sim.history.save_csv(args.csv)
			print(f"Saved {n} rows to {args.csv}")
			print(f"Max relative energy drift: {sim.history.max_abs_drift():.3E}")
	return 0


if __name__ == "__main__":
	raise SystemExit(main())
