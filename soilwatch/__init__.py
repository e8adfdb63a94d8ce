"""SoilWatch - soil sensor ingestion, threshold alerts and sensor ownership"""

__version__ = "1.2.0"
