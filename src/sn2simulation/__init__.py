"""
SN2 Reaction Simulator
======================
Animated backside attack of a nucleophile on a methyl halide, with a
synchronized reaction-coordinate energy diagram.

Core API (pure, Qt-free):
  - sn2simulation.model.frame.get_frame
  - sn2simulation.model.energy.get_energy_at
  - sn2simulation.model.energy.get_energy_series

Playback:
  - sn2simulation.controller.playback.PlaybackController
"""
__version__ = "0.1.0"
