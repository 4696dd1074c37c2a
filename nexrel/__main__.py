from nexrel.cli.app import main

main()
