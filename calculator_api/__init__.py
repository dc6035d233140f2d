"""Calculator HTTP API built on calclib"""
