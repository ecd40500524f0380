"""Contains the name for the logger of cubictable modules.

``cubictable`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
Logging messages are grouped in different levels:

* ``DEBUG``: Per-query details, e.g. queries that fall outside ``[a, b]``
    and are extrapolated from the boundary bracket.
* ``INFO``: An indication that things are working as expected, e.g. a
    finished table build and its number of samples.
* ``WARNING``: An indication that something unexpected
    happened which may require attention, e.g. non-finite function values
    met while sampling.

By default, only messages of level ``WARNING`` are displayed.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``cubictable.logger.cubictable_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.INFO,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "cubictable"
cubictable_logger = logging.getLogger(logger_name)
