"""Engine-agnostic topic-model interfaces and result models."""
