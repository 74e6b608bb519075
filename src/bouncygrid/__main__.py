from bouncygrid.main import main

main()
