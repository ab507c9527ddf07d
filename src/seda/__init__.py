"""seda — clone a repository and open it in your editor.

A small developer toolkit with a strict layered architecture: ``cli``
renders and routes, ``core`` holds pure logic, ``infra`` talks to git,
the network, and the filesystem.
"""

from seda.version import __version__

__all__: list[str] = ["__version__"]
