"""
API routers for the NarrativeShift service.
"""
