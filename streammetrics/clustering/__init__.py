from .mutual_info import MutualInfoScore

__all__ = ["MutualInfoScore"]
