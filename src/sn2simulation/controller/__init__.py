"""
The CONTROLLER layer owns the mutable playback state and the Qt timers that
drive it. Views observe it through Qt Signals; the model stays pure.
"""
