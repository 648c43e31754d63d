from zenith.app import main

main()
