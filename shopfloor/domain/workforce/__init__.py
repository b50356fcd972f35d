"""
Workforce Tracking Domain

Activity events, the directory of workers and machines, and the services that
derive worker state, machine authorization and the plant-wide team snapshot.
"""
