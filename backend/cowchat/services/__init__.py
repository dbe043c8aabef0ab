"""Services Layer — cow allocation and chat session orchestration.

Invariants:
    - Services do the IO around pure core functions (read, compute, write)
    - Storage reached only through the CowRepository protocol

Design Decisions:
    - One service per core component: CowAllocator, ChatRunner
"""
