from premiere_mcp.cli import main

main()
