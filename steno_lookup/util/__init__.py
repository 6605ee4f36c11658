""" General-purpose utilities with no knowledge of steno. """
