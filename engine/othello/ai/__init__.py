"""AI components: minimax search, search tree, bots and background tasks."""

from .minimax import Minimax, SearchConfig, SearchResult, play_move
from .tree import SearchTree, SearchNode
from .bot import OthelloBot
from .worker import SearchTask
