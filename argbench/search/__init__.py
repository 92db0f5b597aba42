"""
Optuna-based hyperparameter search over run configurations.
"""

from .strategy import SearchStrategy, OptunaStrategy, SpaceStrategy
from .builder import RunConfigBuilder
from .adapter import RunAdapter, best_cost_of
from .optuna_search import OptunaSearch
