from chat_relay.adapters.discord.launcher import main

main()
