"""Core framework components for spinwheel."""

from .state import WheelPhase, PhaseMachine
from .events import EventBus, Event, EventType

__all__ = ["WheelPhase", "PhaseMachine", "EventBus", "Event", "EventType"]
