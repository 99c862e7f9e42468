from lrc_extended.cli import main

main()
