"""
The VIEW layer renders validated gaskets for inspection (matplotlib).
"""
