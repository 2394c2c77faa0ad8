from path2md.cli import main

main()
