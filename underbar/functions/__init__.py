"""
Function decorators that change how a callable is invoked.

once and memoize cache results; delay and throttle defer calls through an
injected Scheduler (see underbar.utils.time).
"""
