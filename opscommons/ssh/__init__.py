"""Running commands on remote hosts over SSH, optionally through jump hosts."""