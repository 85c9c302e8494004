"""
The MODEL layer contains pure data structures and reaction logic.
It has NO knowledge of the GUI (Qt) or of the playback timers.
It deals with Geometry, Energetics, Projection and the Bond/Annotation rules,
all as pure functions of the normalized reaction progress ``t``.
"""
