"""Contains the name for the logger of stencilkit modules.

``stencilkit`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
The core only emits ``DEBUG`` messages (coefficient cache misses, chosen
bandwidths). Errors are always raised to the caller, never logged instead.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``stencilkit.logger.stencilkit_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "stencilkit"
stencilkit_logger = logging.getLogger(logger_name)
