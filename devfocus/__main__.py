from devfocus.interfaces.cli.main import main

main()
