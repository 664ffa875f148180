"""Entry point for the slingshot bubble shooter.

Sets up the game world, event bus, systems, and Arcade window.
"""
from slingshot.app import main

if __name__ == "__main__":
    main()
