"""System-wide limits and open(2) flags."""

from enum import IntFlag

NPROC = 64  # maximum number of processes
NCPU = 8  # maximum number of CPUs
NOFILE = 16  # open files per process
NFILE = 100  # open files per system
NINODE = 50  # maximum number of active i-nodes
NDEV = 10  # maximum major device number
ROOTDEV = 1  # device number of file system root disk
MAXARG = 32  # max exec arguments
MAXOPBLOCKS = 10  # max # of blocks any FS op writes
LOGSIZE = MAXOPBLOCKS * 3  # max data blocks in on-disk log
NBUF = MAXOPBLOCKS * 3  # size of disk block cache
FSSIZE = 2000  # size of file system in blocks
MAXPATH = 128  # maximum file path name
USERSTACK = 1  # user stack pages


class OpenFlag(IntFlag):
    """Mode bits accepted by ``open``."""

    RDONLY = 0x000
    WRONLY = 0x001
    RDWR = 0x002
    CREATE = 0x200
    TRUNC = 0x400