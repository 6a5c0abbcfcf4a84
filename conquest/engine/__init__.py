"""Engine layer: economy, capture, AI, simulation scheduler, command queue."""

from conquest.engine.ai import AIDecisionEngine
from conquest.engine.capture import CaptureResolver
from conquest.engine.command_queue import CommandQueue
from conquest.engine.economy import Economy
from conquest.engine.simulation import Simulation

__all__ = ["AIDecisionEngine", "CaptureResolver", "CommandQueue", "Economy", "Simulation"]
