"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or of the external maze generator.
It deals with input validation, display sizing and request state.
"""
