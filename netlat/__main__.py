from netlat.cli import main

main()
