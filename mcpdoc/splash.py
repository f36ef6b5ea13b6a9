SPLASH = """
╔═══════════════════════════════════════╗
║              LLMSTXT-MCP              ║
║         Documentation Server          ║
╚═══════════════════════════════════════╝
"""
