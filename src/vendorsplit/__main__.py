from vendorsplit.cli.main import main

main()
