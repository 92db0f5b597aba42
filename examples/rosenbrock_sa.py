import logging

import matplotlib.pyplot as plt

from argbench import OptimizerConfig, RosenbrockAnneal, RunConfig, Runner
from argbench.core.callbacks import EarlyStopping
from argbench.utils import plot_history, plot_surface


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    problem = RosenbrockAnneal(lower=[-2.0, -1.0], upper=[2.0, 3.0], seed=42)

    opt_cfg = OptimizerConfig(
        name="sa",
        init_temp=15.0,
    )

    cfg = RunConfig(
        seed=42,
        max_iters=2000,
        log_every=200,
        init_param=[-1.5, 2.5],
        optimizer="sa",
        optimizer_config=opt_cfg,
        callbacks=[EarlyStopping(patience=500, min_delta=1e-6)],
    )

    runner = Runner(problem, cfg)
    result = runner.run()

    print(f"best cost {result.best_cost:.6g} at {result.best_param}")
    print(f"stopped: {result.termination_reason} after {result.iterations} iterations")

    plot_history(result.history, title="Simulated annealing on Rosenbrock")
    plot_surface(problem, lower=[-2.0, -1.0], upper=[2.0, 3.0], path=result.history["param"])
    plt.show()


if __name__ == "__main__":
    main()
