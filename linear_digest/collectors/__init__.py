"""
Collectors package - Linear issue retrieval and digest aggregation
"""
