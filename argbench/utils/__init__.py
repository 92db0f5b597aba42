from .plots import plot_history, plot_surface
from .seed import set_seed

__all__ = ["plot_history", "plot_surface", "set_seed"]
