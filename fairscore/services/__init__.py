"""
Services for the Science Fair Evaluation Platform.
"""
