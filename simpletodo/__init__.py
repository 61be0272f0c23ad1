"""
SimpleTodo - single-screen to-do list for the terminal.

Architecture:
- providers.py: Data types and storage protocols
- store.py: Intents and the reducer that owns task identity and order
- state_provider.py: Key-value backends and the persistence bridge
- controller.py: Applies intents, then saves the full task list
- views/: Textual screen/widget components
- app.py: Main application entry point
"""

__version__ = "0.1.0"
