"""
End-to-end tests for runkit.

These tests drive complete workflows with real processes, real files and the
real watcher: a build script running pipelines, and a watch loop restarting
a server while its sources are edited.
"""
