"""
dbt-core-interface client

Lints and formats SQL/dbt models through a running dbt-core-interface
server, with health probing, request deadlines and structured errors.
"""

__version__ = "1.0.0"
__author__ = "dbt-interface-client Team"
