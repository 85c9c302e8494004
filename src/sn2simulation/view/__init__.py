"""
The VIEW layer: Qt widgets that draw frames and snapshots produced by the
model and the playback controller. Views never mutate shared state directly;
user input is forwarded to the PlaybackController.
"""
