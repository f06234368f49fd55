"""
propscore HTTP API
"""
