"""Application layer - the notification use case.

Structure:
- services/: identity lookup, page snapshot, record merge, message formatting
- options.py: per-notifier options
- dispatch_trigger.py: the one-shot, debounced, cancelable Notigram control

The application layer orchestrates domain ports but performs no I/O itself.
"""
