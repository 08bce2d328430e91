"""
FastAPI surface of the NarrativeShift service.
"""
