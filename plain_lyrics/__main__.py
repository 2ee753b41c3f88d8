from plain_lyrics.cli import main

main()
