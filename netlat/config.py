"""Configuration classes for netlat analyses."""

from dataclasses import dataclass


@dataclass
class AnalysisConfig:
    """Knobs shared by the analysis engines."""

    # Run the optimality/feasibility self-checks after each computation
    check_optimality: bool = True

    # Allowed slack when checking flow bounds and conservation
    flow_tolerance: float = 0.0

    # Cut-pair enumeration logs a warning above this vertex count
    cut_pair_warn_vertices: int = 500

    def cut_pair_work(self, vertices: int, edges: int) -> int:
        """Approximate number of visited elements for a full cut-pair scan."""
        pairs = vertices * (vertices - 1) // 2
        return pairs * (vertices + edges)


# Global configuration instance
ANALYSIS_CONFIG = AnalysisConfig()
