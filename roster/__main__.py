from roster.main import main

main()
