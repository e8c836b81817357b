"""
Core state engine.

Components:
- ports.py: Protocols for storage, animation and rendering
- animation.py: animated values + reference animators
- edit_session.py: single-slot edit state machine
- deletion.py: animate-then-remove coordination
- pulse.py: creation feedback pulse
- state.py: TaskListApp (intents in, views out)
"""
