"""aurvoid - A minimalist AUR helper.

Resolves a package name against the AUR RPC API, clones its recipe, builds
and installs it with makepkg, and suggests similar packages when the name
does not resolve.
"""

__version__ = "0.1.0"
