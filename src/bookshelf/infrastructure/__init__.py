"""
Infrastructure Layer
=====================

Database engine management shared by all modules.
"""
