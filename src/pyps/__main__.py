from pyps.app import main

main()
