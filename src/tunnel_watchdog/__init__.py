"""tunnel-watchdog: shut down an idle dev tunnel host.

Polls the dev tunnel for client connections and schedules a host shutdown
once nobody has been connected for the configured grace period.
"""

__version__ = "0.1.0"
