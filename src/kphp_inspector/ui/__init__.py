"""
Terminal user interface for the KPHP Inspector: printing, keyboard input,
the selection menu and the interactive console.
"""
