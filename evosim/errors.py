# evosim/errors.py


class SimulationError(Exception):
    """Raised for invalid simulation setup, e.g. a world with no area."""
