"""
Text generation boundary layer.

Dependencies: langchain_google_genai
System role: Generation capability adapter
"""
