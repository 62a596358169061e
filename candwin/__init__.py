from .candidate_store import Candidate, CandidateStore, Page
from .commands import Command, parse_frame
from .controller import CandidateWindowController
from .dispatcher import Dispatcher
from .frame_reader import FrameReader, TransportClosed
from .grid_visibility import GridSpacing, VisibleRegion, compute_visible_region, grid_spacing
from .label_table import LabelTable
from .layout_positioner import place_popup
from .pagination import PaginationState
from .version import __version__

__all__ = [
    "Candidate",
    "CandidateStore",
    "CandidateWindowController",
    "Command",
    "Dispatcher",
    "FrameReader",
    "GridSpacing",
    "LabelTable",
    "Page",
    "PaginationState",
    "TransportClosed",
    "VisibleRegion",
    "__version__",
    "compute_visible_region",
    "grid_spacing",
    "parse_frame",
    "place_popup",
]
