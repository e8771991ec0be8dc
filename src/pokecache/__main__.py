from pokecache.server import main

main()
