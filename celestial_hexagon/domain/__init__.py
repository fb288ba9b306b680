from celestial_hexagon.domain.event import EclipseEvent
from celestial_hexagon.domain.pattern import HexagonalPattern, SymmetryPair
from celestial_hexagon.domain.search import SearchProgress, SearchResult

__all__ = ["EclipseEvent", "SymmetryPair", "HexagonalPattern", "SearchProgress", "SearchResult"]
