"""
flow-translate: EPUB translation through remote LLM providers
"""
