from relpub.cli.app import main

main()
