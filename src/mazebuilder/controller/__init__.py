"""
The CONTROLLER layer connects the view to the external maze generator.
It owns the request state machine and the background worker.
"""
