"""Routing — path derivation, controller discovery and route records.

Routes are derived and registered during setup; matching requests is
left to the router the caller supplies.
"""
