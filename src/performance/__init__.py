"""Fleet performance aggregation.

Category uptime, alert ranking, KPI derivation and the synthesized demo
trend series. Pure functions over record lists with no store access.
"""
