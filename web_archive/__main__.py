from web_archive.cli import main

main()
