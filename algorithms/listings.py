"""
listings.py — Reference Source Listings
========================================
Plain reference implementations shown in the "Code" tabs, one per
language offered by the preferredLanguage preference.

    LISTINGS["bubble-sort"]["python"]  →  str
"""

from typing import Dict


LANGUAGES = ("python", "javascript", "java")


LISTINGS: Dict[str, Dict[str, str]] = {

    # ------------------------------------------------------------------
    "bubble-sort": {
        "python": """\
def bubble_sort(arr):
    n = len(arr)
    for i in range(n):
        swapped = False
        for j in range(0, n - i - 1):
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swapped = True
        if not swapped:
            break
    return arr""",
        "javascript": """\
function bubbleSort(arr) {
  const n = arr.length;
  for (let i = 0; i < n; i++) {
    let swapped = false;
    for (let j = 0; j < n - i - 1; j++) {
      if (arr[j] > arr[j + 1]) {
        [arr[j], arr[j + 1]] = [arr[j + 1], arr[j]];
        swapped = true;
      }
    }
    if (!swapped) break;
  }
  return arr;
}""",
        "java": """\
static void bubbleSort(int[] arr) {
    int n = arr.length;
    for (int i = 0; i < n; i++) {
        boolean swapped = false;
        for (int j = 0; j < n - i - 1; j++) {
            if (arr[j] > arr[j + 1]) {
                int tmp = arr[j];
                arr[j] = arr[j + 1];
                arr[j + 1] = tmp;
                swapped = true;
            }
        }
        if (!swapped) break;
    }
}""",
    },

    # ------------------------------------------------------------------
    "selection-sort": {
        "python": """\
def selection_sort(arr):
    n = len(arr)
    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            if arr[j] < arr[min_idx]:
                min_idx = j
        if min_idx != i:
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
    return arr""",
        "javascript": """\
function selectionSort(arr) {
  const n = arr.length;
  for (let i = 0; i < n - 1; i++) {
    let minIdx = i;
    for (let j = i + 1; j < n; j++) {
      if (arr[j] < arr[minIdx]) minIdx = j;
    }
    if (minIdx !== i) {
      [arr[i], arr[minIdx]] = [arr[minIdx], arr[i]];
    }
  }
  return arr;
}""",
        "java": """\
static void selectionSort(int[] arr) {
    int n = arr.length;
    for (int i = 0; i < n - 1; i++) {
        int minIdx = i;
        for (int j = i + 1; j < n; j++) {
            if (arr[j] < arr[minIdx]) minIdx = j;
        }
        if (minIdx != i) {
            int tmp = arr[i];
            arr[i] = arr[minIdx];
            arr[minIdx] = tmp;
        }
    }
}""",
    },

    # ------------------------------------------------------------------
    "insertion-sort": {
        "python": """\
def insertion_sort(arr):
    for i in range(1, len(arr)):
        key = arr[i]
        j = i - 1
        while j >= 0 and arr[j] > key:
            arr[j + 1] = arr[j]
            j -= 1
        arr[j + 1] = key
    return arr""",
        "javascript": """\
function insertionSort(arr) {
  for (let i = 1; i < arr.length; i++) {
    const key = arr[i];
    let j = i - 1;
    while (j >= 0 && arr[j] > key) {
      arr[j + 1] = arr[j];
      j--;
    }
    arr[j + 1] = key;
  }
  return arr;
}""",
        "java": """\
static void insertionSort(int[] arr) {
    for (int i = 1; i < arr.length; i++) {
        int key = arr[i];
        int j = i - 1;
        while (j >= 0 && arr[j] > key) {
            arr[j + 1] = arr[j];
            j--;
        }
        arr[j + 1] = key;
    }
}""",
    },

    # ------------------------------------------------------------------
    "merge-sort": {
        "python": """\
def merge_sort(arr):
    if len(arr) <= 1:
        return arr
    mid = len(arr) // 2
    left = merge_sort(arr[:mid])
    right = merge_sort(arr[mid:])
    return merge(left, right)

def merge(left, right):
    result = []
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i] <= right[j]:
            result.append(left[i])
            i += 1
        else:
            result.append(right[j])
            j += 1
    result.extend(left[i:])
    result.extend(right[j:])
    return result""",
        "javascript": """\
function mergeSort(arr) {
  if (arr.length <= 1) return arr;
  const mid = Math.floor(arr.length / 2);
  const left = mergeSort(arr.slice(0, mid));
  const right = mergeSort(arr.slice(mid));
  return merge(left, right);
}

function merge(left, right) {
  const result = [];
  let i = 0, j = 0;
  while (i < left.length && j < right.length) {
    if (left[i] <= right[j]) result.push(left[i++]);
    else result.push(right[j++]);
  }
  return result.concat(left.slice(i)).concat(right.slice(j));
}""",
        "java": """\
static void mergeSort(int[] arr, int left, int right) {
    if (left >= right) return;
    int mid = (left + right) / 2;
    mergeSort(arr, left, mid);
    mergeSort(arr, mid + 1, right);
    merge(arr, left, mid, right);
}

static void merge(int[] arr, int left, int mid, int right) {
    int[] tmp = new int[right - left + 1];
    int i = left, j = mid + 1, k = 0;
    while (i <= mid && j <= right) {
        tmp[k++] = arr[i] <= arr[j] ? arr[i++] : arr[j++];
    }
    while (i <= mid) tmp[k++] = arr[i++];
    while (j <= right) tmp[k++] = arr[j++];
    System.arraycopy(tmp, 0, arr, left, tmp.length);
}""",
    },

    # ------------------------------------------------------------------
    "quick-sort": {
        "python": """\
def quick_sort(arr, low=0, high=None):
    if high is None:
        high = len(arr) - 1
    if low < high:
        p = partition(arr, low, high)
        quick_sort(arr, low, p - 1)
        quick_sort(arr, p + 1, high)
    return arr

def partition(arr, low, high):
    pivot = arr[high]
    i = low - 1
    for j in range(low, high):
        if arr[j] < pivot:
            i += 1
            arr[i], arr[j] = arr[j], arr[i]
    arr[i + 1], arr[high] = arr[high], arr[i + 1]
    return i + 1""",
        "javascript": """\
function quickSort(arr, low = 0, high = arr.length - 1) {
  if (low < high) {
    const p = partition(arr, low, high);
    quickSort(arr, low, p - 1);
    quickSort(arr, p + 1, high);
  }
  return arr;
}

function partition(arr, low, high) {
  const pivot = arr[high];
  let i = low - 1;
  for (let j = low; j < high; j++) {
    if (arr[j] < pivot) {
      i++;
      [arr[i], arr[j]] = [arr[j], arr[i]];
    }
  }
  [arr[i + 1], arr[high]] = [arr[high], arr[i + 1]];
  return i + 1;
}""",
        "java": """\
static void quickSort(int[] arr, int low, int high) {
    if (low < high) {
        int p = partition(arr, low, high);
        quickSort(arr, low, p - 1);
        quickSort(arr, p + 1, high);
    }
}

static int partition(int[] arr, int low, int high) {
    int pivot = arr[high];
    int i = low - 1;
    for (int j = low; j < high; j++) {
        if (arr[j] < pivot) {
            i++;
            int tmp = arr[i]; arr[i] = arr[j]; arr[j] = tmp;
        }
    }
    int tmp = arr[i + 1]; arr[i + 1] = arr[high]; arr[high] = tmp;
    return i + 1;
}""",
    },

    # ------------------------------------------------------------------
    "linear-search": {
        "python": """\
def linear_search(arr, target):
    for i, value in enumerate(arr):
        if value == target:
            return i
    return -1""",
        "javascript": """\
function linearSearch(arr, target) {
  for (let i = 0; i < arr.length; i++) {
    if (arr[i] === target) return i;
  }
  return -1;
}""",
        "java": """\
static int linearSearch(int[] arr, int target) {
    for (int i = 0; i < arr.length; i++) {
        if (arr[i] == target) return i;
    }
    return -1;
}""",
    },

    # ------------------------------------------------------------------
    "binary-search": {
        "python": """\
def binary_search(arr, target):
    low, high = 0, len(arr) - 1
    while low <= high:
        mid = (low + high) // 2
        if arr[mid] == target:
            return mid
        if arr[mid] < target:
            low = mid + 1
        else:
            high = mid - 1
    return -1""",
        "javascript": """\
function binarySearch(arr, target) {
  let low = 0, high = arr.length - 1;
  while (low <= high) {
    const mid = Math.floor((low + high) / 2);
    if (arr[mid] === target) return mid;
    if (arr[mid] < target) low = mid + 1;
    else high = mid - 1;
  }
  return -1;
}""",
        "java": """\
static int binarySearch(int[] arr, int target) {
    int low = 0, high = arr.length - 1;
    while (low <= high) {
        int mid = (low + high) / 2;
        if (arr[mid] == target) return mid;
        if (arr[mid] < target) low = mid + 1;
        else high = mid - 1;
    }
    return -1;
}""",
    },

    # ------------------------------------------------------------------
    "dijkstra": {
        "python": """\
def dijkstra(graph, source):
    dist = {v: float("inf") for v in graph}
    prev = {v: None for v in graph}
    dist[source] = 0
    unvisited = set(graph)
    while unvisited:
        u = min(unvisited, key=lambda v: dist[v])
        if dist[u] == float("inf"):
            break
        unvisited.remove(u)
        for v, w in graph[u]:
            if v in unvisited and dist[u] + w < dist[v]:
                dist[v] = dist[u] + w
                prev[v] = u
    return dist, prev""",
        "javascript": """\
function dijkstra(graph, source) {
  const dist = {}, prev = {};
  const unvisited = new Set(Object.keys(graph));
  for (const v of unvisited) { dist[v] = Infinity; prev[v] = null; }
  dist[source] = 0;
  while (unvisited.size > 0) {
    let u = null;
    for (const v of unvisited) if (u === null || dist[v] < dist[u]) u = v;
    if (dist[u] === Infinity) break;
    unvisited.delete(u);
    for (const [v, w] of graph[u]) {
      if (unvisited.has(v) && dist[u] + w < dist[v]) {
        dist[v] = dist[u] + w;
        prev[v] = u;
      }
    }
  }
  return { dist, prev };
}""",
        "java": """\
static int[] dijkstra(int[][] w, int source) {
    int n = w.length;
    int[] dist = new int[n];
    boolean[] done = new boolean[n];
    Arrays.fill(dist, Integer.MAX_VALUE);
    dist[source] = 0;
    for (int round = 0; round < n; round++) {
        int u = -1;
        for (int v = 0; v < n; v++)
            if (!done[v] && (u == -1 || dist[v] < dist[u])) u = v;
        if (dist[u] == Integer.MAX_VALUE) break;
        done[u] = true;
        for (int v = 0; v < n; v++)
            if (w[u][v] > 0 && !done[v] && dist[u] + w[u][v] < dist[v])
                dist[v] = dist[u] + w[u][v];
    }
    return dist;
}""",
    },

    # ------------------------------------------------------------------
    "bellman-ford": {
        "python": """\
def bellman_ford(nodes, edges, source):
    dist = {v: float("inf") for v in nodes}
    dist[source] = 0
    for _ in range(len(nodes) - 1):
        changed = False
        for u, v, w in edges:
            if dist[u] + w < dist[v]:
                dist[v] = dist[u] + w
                changed = True
        if not changed:
            break
    for u, v, w in edges:
        if dist[u] + w < dist[v]:
            raise ValueError("negative cycle")
    return dist""",
        "javascript": """\
function bellmanFord(nodes, edges, source) {
  const dist = {};
  for (const v of nodes) dist[v] = Infinity;
  dist[source] = 0;
  for (let i = 1; i < nodes.length; i++) {
    let changed = false;
    for (const [u, v, w] of edges) {
      if (dist[u] + w < dist[v]) { dist[v] = dist[u] + w; changed = true; }
    }
    if (!changed) break;
  }
  for (const [u, v, w] of edges) {
    if (dist[u] + w < dist[v]) throw new Error("negative cycle");
  }
  return dist;
}""",
        "java": """\
static long[] bellmanFord(int n, int[][] edges, int source) {
    long[] dist = new long[n];
    Arrays.fill(dist, Long.MAX_VALUE);
    dist[source] = 0;
    for (int i = 1; i < n; i++) {
        boolean changed = false;
        for (int[] e : edges) {
            if (dist[e[0]] != Long.MAX_VALUE && dist[e[0]] + e[2] < dist[e[1]]) {
                dist[e[1]] = dist[e[0]] + e[2];
                changed = true;
            }
        }
        if (!changed) break;
    }
    for (int[] e : edges)
        if (dist[e[0]] != Long.MAX_VALUE && dist[e[0]] + e[2] < dist[e[1]])
            throw new IllegalStateException("negative cycle");
    return dist;
}""",
    },

    # ------------------------------------------------------------------
    "floyd-warshall": {
        "python": """\
def floyd_warshall(dist):
    n = len(dist)
    for k in range(n):
        for i in range(n):
            for j in range(n):
                if dist[i][k] + dist[k][j] < dist[i][j]:
                    dist[i][j] = dist[i][k] + dist[k][j]
    return dist""",
        "javascript": """\
function floydWarshall(dist) {
  const n = dist.length;
  for (let k = 0; k < n; k++)
    for (let i = 0; i < n; i++)
      for (let j = 0; j < n; j++)
        if (dist[i][k] + dist[k][j] < dist[i][j])
          dist[i][j] = dist[i][k] + dist[k][j];
  return dist;
}""",
        "java": """\
static void floydWarshall(double[][] dist) {
    int n = dist.length;
    for (int k = 0; k < n; k++)
        for (int i = 0; i < n; i++)
            for (int j = 0; j < n; j++)
                if (dist[i][k] + dist[k][j] < dist[i][j])
                    dist[i][j] = dist[i][k] + dist[k][j];
}""",
    },

    # ------------------------------------------------------------------
    "prim-mst": {
        "python": """\
def prim(graph, start):
    tree, cost = {start}, 0
    edges = []
    while len(tree) < len(graph):
        best = None
        for u in tree:
            for v, w in graph[u]:
                if v not in tree and (best is None or w < best[2]):
                    best = (u, v, w)
        if best is None:
            break  # disconnected
        tree.add(best[1])
        edges.append(best)
        cost += best[2]
    return edges, cost""",
        "javascript": """\
function prim(graph, start) {
  const tree = new Set([start]);
  const edges = [];
  let cost = 0;
  while (tree.size < Object.keys(graph).length) {
    let best = null;
    for (const u of tree)
      for (const [v, w] of graph[u])
        if (!tree.has(v) && (best === null || w < best[2])) best = [u, v, w];
    if (best === null) break; // disconnected
    tree.add(best[1]);
    edges.push(best);
    cost += best[2];
  }
  return { edges, cost };
}""",
        "java": """\
static int prim(int[][] w, int start) {
    int n = w.length, cost = 0;
    boolean[] inTree = new boolean[n];
    inTree[start] = true;
    for (int added = 1; added < n; added++) {
        int bu = -1, bv = -1;
        for (int u = 0; u < n; u++)
            if (inTree[u])
                for (int v = 0; v < n; v++)
                    if (!inTree[v] && w[u][v] > 0 && (bu == -1 || w[u][v] < w[bu][bv])) { bu = u; bv = v; }
        if (bu == -1) break; // disconnected
        inTree[bv] = true;
        cost += w[bu][bv];
    }
    return cost;
}""",
    },

    # ------------------------------------------------------------------
    "fractional-knapsack": {
        "python": """\
def fractional_knapsack(items, capacity):
    items = sorted(items, key=lambda it: it["value"] / it["weight"], reverse=True)
    room, total = capacity, 0.0
    for item in items:
        if room >= item["weight"]:
            room -= item["weight"]
            total += item["value"]
        elif room > 0:
            total += item["value"] * room / item["weight"]
            room = 0
        else:
            break
    return total""",
        "javascript": """\
function fractionalKnapsack(items, capacity) {
  const sorted = [...items].sort((a, b) => b.value / b.weight - a.value / a.weight);
  let room = capacity, total = 0;
  for (const item of sorted) {
    if (room >= item.weight) {
      room -= item.weight;
      total += item.value;
    } else if (room > 0) {
      total += item.value * room / item.weight;
      room = 0;
    } else break;
  }
  return total;
}""",
        "java": """\
static double fractionalKnapsack(double[] value, double[] weight, double capacity) {
    Integer[] order = new Integer[value.length];
    for (int i = 0; i < order.length; i++) order[i] = i;
    Arrays.sort(order, (a, b) -> Double.compare(value[b] / weight[b], value[a] / weight[a]));
    double room = capacity, total = 0;
    for (int i : order) {
        if (room >= weight[i]) { room -= weight[i]; total += value[i]; }
        else if (room > 0) { total += value[i] * room / weight[i]; room = 0; }
        else break;
    }
    return total;
}""",
    },

    # ------------------------------------------------------------------
    "stack": {
        "python": """\
class Stack:
    def __init__(self, capacity):
        self.items, self.capacity = [], capacity

    def push(self, value):
        if len(self.items) == self.capacity:
            raise OverflowError("stack overflow")
        self.items.append(value)

    def pop(self):
        if not self.items:
            raise IndexError("stack underflow")
        return self.items.pop()

    def peek(self):
        return self.items[-1] if self.items else None""",
        "javascript": """\
class Stack {
  constructor(capacity) { this.items = []; this.capacity = capacity; }
  push(value) {
    if (this.items.length === this.capacity) throw new Error("Stack Overflow");
    this.items.push(value);
  }
  pop() {
    if (this.items.length === 0) throw new Error("Stack Underflow");
    return this.items.pop();
  }
  peek() { return this.items.length ? this.items[this.items.length - 1] : null; }
}""",
        "java": """\
class Stack {
    private final int[] items;
    private int top = -1;
    Stack(int capacity) { items = new int[capacity]; }
    void push(int value) {
        if (top == items.length - 1) throw new IllegalStateException("Stack Overflow");
        items[++top] = value;
    }
    int pop() {
        if (top == -1) throw new IllegalStateException("Stack Underflow");
        return items[top--];
    }
    int peek() { return items[top]; }
}""",
    },

    # ------------------------------------------------------------------
    "queue": {
        "python": """\
from collections import deque

class Queue:
    def __init__(self, capacity):
        self.items, self.capacity = deque(), capacity

    def enqueue(self, value):
        if len(self.items) == self.capacity:
            raise OverflowError("queue is full")
        self.items.append(value)

    def dequeue(self):
        if not self.items:
            raise IndexError("queue is empty")
        return self.items.popleft()

    def peek(self):
        return self.items[0] if self.items else None""",
        "javascript": """\
class Queue {
  constructor(capacity) { this.items = []; this.capacity = capacity; }
  enqueue(value) {
    if (this.items.length === this.capacity) throw new Error("Queue is full");
    this.items.push(value);
  }
  dequeue() {
    if (this.items.length === 0) throw new Error("Queue is empty");
    return this.items.shift();
  }
  peek() { return this.items.length ? this.items[0] : null; }
}""",
        "java": """\
class Queue {
    private final java.util.ArrayDeque<Integer> items = new java.util.ArrayDeque<>();
    private final int capacity;
    Queue(int capacity) { this.capacity = capacity; }
    void enqueue(int value) {
        if (items.size() == capacity) throw new IllegalStateException("Queue is full");
        items.addLast(value);
    }
    int dequeue() {
        if (items.isEmpty()) throw new IllegalStateException("Queue is empty");
        return items.removeFirst();
    }
    int peek() { return items.peekFirst(); }
}""",
    },

    # ------------------------------------------------------------------
    "circular-queue": {
        "python": """\
class CircularQueue:
    def __init__(self, capacity):
        self.slots = [None] * capacity
        self.front = self.rear = -1

    def is_full(self):
        return (self.rear + 1) % len(self.slots) == self.front

    def enqueue(self, value):
        if self.is_full():
            raise OverflowError("queue is full")
        if self.front == -1:
            self.front = 0
        self.rear = (self.rear + 1) % len(self.slots)
        self.slots[self.rear] = value

    def dequeue(self):
        if self.front == -1:
            raise IndexError("queue is empty")
        value, self.slots[self.front] = self.slots[self.front], None
        if self.front == self.rear:
            self.front = self.rear = -1
        else:
            self.front = (self.front + 1) % len(self.slots)
        return value""",
        "javascript": """\
class CircularQueue {
  constructor(capacity) {
    this.slots = new Array(capacity).fill(null);
    this.front = this.rear = -1;
  }
  isFull() { return (this.rear + 1) % this.slots.length === this.front; }
  enqueue(value) {
    if (this.isFull()) throw new Error("Queue is full");
    if (this.front === -1) this.front = 0;
    this.rear = (this.rear + 1) % this.slots.length;
    this.slots[this.rear] = value;
  }
  dequeue() {
    if (this.front === -1) throw new Error("Queue is empty");
    const value = this.slots[this.front];
    this.slots[this.front] = null;
    if (this.front === this.rear) this.front = this.rear = -1;
    else this.front = (this.front + 1) % this.slots.length;
    return value;
  }
}""",
        "java": """\
class CircularQueue {
    private final Integer[] slots;
    private int front = -1, rear = -1;
    CircularQueue(int capacity) { slots = new Integer[capacity]; }
    boolean isFull() { return (rear + 1) % slots.length == front; }
    void enqueue(int value) {
        if (isFull()) throw new IllegalStateException("Queue is full");
        if (front == -1) front = 0;
        rear = (rear + 1) % slots.length;
        slots[rear] = value;
    }
    int dequeue() {
        if (front == -1) throw new IllegalStateException("Queue is empty");
        int value = slots[front];
        slots[front] = null;
        if (front == rear) front = rear = -1;
        else front = (front + 1) % slots.length;
        return value;
    }
}""",
    },

    # ------------------------------------------------------------------
    "linked-list": {
        "python": """\
class Node:
    def __init__(self, value, next=None):
        self.value, self.next = value, next

class LinkedList:
    def __init__(self):
        self.head = None

    def insert_head(self, value):
        self.head = Node(value, self.head)

    def insert_tail(self, value):
        if self.head is None:
            self.head = Node(value)
            return
        node = self.head
        while node.next:
            node = node.next
        node.next = Node(value)

    def search(self, value):
        node, index = self.head, 0
        while node:
            if node.value == value:
                return index
            node, index = node.next, index + 1
        return -1""",
        "javascript": """\
class LinkedList {
  constructor() { this.head = null; }
  insertHead(value) { this.head = { value, next: this.head }; }
  insertTail(value) {
    const node = { value, next: null };
    if (!this.head) { this.head = node; return; }
    let cur = this.head;
    while (cur.next) cur = cur.next;
    cur.next = node;
  }
  search(value) {
    let cur = this.head, index = 0;
    while (cur) {
      if (cur.value === value) return index;
      cur = cur.next; index++;
    }
    return -1;
  }
}""",
        "java": """\
class LinkedList {
    static class Node { int value; Node next; Node(int v, Node n) { value = v; next = n; } }
    Node head;
    void insertHead(int value) { head = new Node(value, head); }
    void insertTail(int value) {
        if (head == null) { head = new Node(value, null); return; }
        Node cur = head;
        while (cur.next != null) cur = cur.next;
        cur.next = new Node(value, null);
    }
    int search(int value) {
        int index = 0;
        for (Node cur = head; cur != null; cur = cur.next, index++)
            if (cur.value == value) return index;
        return -1;
    }
}""",
    },

    # ------------------------------------------------------------------
    "doubly-linked-list": {
        "python": """\
class Node:
    def __init__(self, value):
        self.value, self.prev, self.next = value, None, None

class DoublyLinkedList:
    def __init__(self):
        self.head = self.tail = None

    def insert_tail(self, value):
        node = Node(value)
        if self.tail is None:
            self.head = self.tail = node
        else:
            node.prev, self.tail.next = self.tail, node
            self.tail = node

    def delete(self, node):
        if node.prev:
            node.prev.next = node.next
        else:
            self.head = node.next
        if node.next:
            node.next.prev = node.prev
        else:
            self.tail = node.prev""",
        "javascript": """\
class DoublyLinkedList {
  constructor() { this.head = this.tail = null; }
  insertTail(value) {
    const node = { value, prev: this.tail, next: null };
    if (!this.tail) this.head = node;
    else this.tail.next = node;
    this.tail = node;
  }
  delete(node) {
    if (node.prev) node.prev.next = node.next; else this.head = node.next;
    if (node.next) node.next.prev = node.prev; else this.tail = node.prev;
  }
}""",
        "java": """\
class DoublyLinkedList {
    static class Node { int value; Node prev, next; Node(int v) { value = v; } }
    Node head, tail;
    void insertTail(int value) {
        Node node = new Node(value);
        if (tail == null) { head = tail = node; return; }
        node.prev = tail;
        tail.next = node;
        tail = node;
    }
    void delete(Node node) {
        if (node.prev != null) node.prev.next = node.next; else head = node.next;
        if (node.next != null) node.next.prev = node.prev; else tail = node.prev;
    }
}""",
    },

    # ------------------------------------------------------------------
    "bst": {
        "python": """\
class Node:
    def __init__(self, value):
        self.value, self.left, self.right = value, None, None

def insert(root, value):
    if root is None:
        return Node(value)
    if value < root.value:
        root.left = insert(root.left, value)
    elif value > root.value:
        root.right = insert(root.right, value)
    return root

def search(root, value):
    while root and root.value != value:
        root = root.left if value < root.value else root.right
    return root""",
        "javascript": """\
function insert(root, value) {
  if (!root) return { value, left: null, right: null };
  if (value < root.value) root.left = insert(root.left, value);
  else if (value > root.value) root.right = insert(root.right, value);
  return root;
}

function search(root, value) {
  while (root && root.value !== value)
    root = value < root.value ? root.left : root.right;
  return root;
}""",
        "java": """\
static Node insert(Node root, int value) {
    if (root == null) return new Node(value);
    if (value < root.value) root.left = insert(root.left, value);
    else if (value > root.value) root.right = insert(root.right, value);
    return root;
}

static Node search(Node root, int value) {
    while (root != null && root.value != value)
        root = value < root.value ? root.left : root.right;
    return root;
}""",
    },

    # ------------------------------------------------------------------
    "avl-tree": {
        "python": """\
def height(node):
    return node.height if node else 0

def rotate_right(y):
    x = y.left
    y.left, x.right = x.right, y
    y.height = 1 + max(height(y.left), height(y.right))
    x.height = 1 + max(height(x.left), height(x.right))
    return x

def insert(node, value):
    if node is None:
        return Node(value)
    if value < node.value:
        node.left = insert(node.left, value)
    else:
        node.right = insert(node.right, value)
    node.height = 1 + max(height(node.left), height(node.right))
    balance = height(node.left) - height(node.right)
    if balance > 1 and value < node.left.value:
        return rotate_right(node)
    if balance < -1 and value > node.right.value:
        return rotate_left(node)
    if balance > 1:
        node.left = rotate_left(node.left)
        return rotate_right(node)
    if balance < -1:
        node.right = rotate_right(node.right)
        return rotate_left(node)
    return node""",
        "javascript": """\
const height = (n) => (n ? n.height : 0);

function rotateRight(y) {
  const x = y.left;
  y.left = x.right; x.right = y;
  y.height = 1 + Math.max(height(y.left), height(y.right));
  x.height = 1 + Math.max(height(x.left), height(x.right));
  return x;
}

function insert(node, value) {
  if (!node) return { value, left: null, right: null, height: 1 };
  if (value < node.value) node.left = insert(node.left, value);
  else node.right = insert(node.right, value);
  node.height = 1 + Math.max(height(node.left), height(node.right));
  const balance = height(node.left) - height(node.right);
  if (balance > 1 && value < node.left.value) return rotateRight(node);
  if (balance < -1 && value > node.right.value) return rotateLeft(node);
  if (balance > 1) { node.left = rotateLeft(node.left); return rotateRight(node); }
  if (balance < -1) { node.right = rotateRight(node.right); return rotateLeft(node); }
  return node;
}""",
        "java": """\
static int height(Node n) { return n == null ? 0 : n.height; }

static Node rotateRight(Node y) {
    Node x = y.left;
    y.left = x.right;
    x.right = y;
    y.height = 1 + Math.max(height(y.left), height(y.right));
    x.height = 1 + Math.max(height(x.left), height(x.right));
    return x;
}

static Node insert(Node node, int value) {
    if (node == null) return new Node(value);
    if (value < node.value) node.left = insert(node.left, value);
    else node.right = insert(node.right, value);
    node.height = 1 + Math.max(height(node.left), height(node.right));
    int balance = height(node.left) - height(node.right);
    if (balance > 1 && value < node.left.value) return rotateRight(node);
    if (balance < -1 && value > node.right.value) return rotateLeft(node);
    if (balance > 1) { node.left = rotateLeft(node.left); return rotateRight(node); }
    if (balance < -1) { node.right = rotateRight(node.right); return rotateLeft(node); }
    return node;
}""",
    },

    # ------------------------------------------------------------------
    "min-heap": {
        "python": """\
def push(heap, value):
    heap.append(value)
    i = len(heap) - 1
    while i > 0 and heap[i] < heap[(i - 1) // 2]:
        parent = (i - 1) // 2
        heap[i], heap[parent] = heap[parent], heap[i]
        i = parent

def pop(heap):
    top, heap[0] = heap[0], heap[-1]
    heap.pop()
    i = 0
    while True:
        smallest = i
        for child in (2 * i + 1, 2 * i + 2):
            if child < len(heap) and heap[child] < heap[smallest]:
                smallest = child
        if smallest == i:
            return top
        heap[i], heap[smallest] = heap[smallest], heap[i]
        i = smallest""",
        "javascript": """\
function push(heap, value) {
  heap.push(value);
  let i = heap.length - 1;
  while (i > 0 && heap[i] < heap[(i - 1) >> 1]) {
    const parent = (i - 1) >> 1;
    [heap[i], heap[parent]] = [heap[parent], heap[i]];
    i = parent;
  }
}

function pop(heap) {
  const top = heap[0];
  heap[0] = heap[heap.length - 1];
  heap.pop();
  let i = 0;
  for (;;) {
    let smallest = i;
    for (const child of [2 * i + 1, 2 * i + 2])
      if (child < heap.length && heap[child] < heap[smallest]) smallest = child;
    if (smallest === i) return top;
    [heap[i], heap[smallest]] = [heap[smallest], heap[i]];
    i = smallest;
  }
}""",
        "java": """\
static void push(java.util.List<Integer> heap, int value) {
    heap.add(value);
    int i = heap.size() - 1;
    while (i > 0 && heap.get(i) < heap.get((i - 1) / 2)) {
        java.util.Collections.swap(heap, i, (i - 1) / 2);
        i = (i - 1) / 2;
    }
}

static int pop(java.util.List<Integer> heap) {
    int top = heap.get(0);
    heap.set(0, heap.get(heap.size() - 1));
    heap.remove(heap.size() - 1);
    int i = 0;
    while (true) {
        int smallest = i;
        for (int child = 2 * i + 1; child <= 2 * i + 2; child++)
            if (child < heap.size() && heap.get(child) < heap.get(smallest)) smallest = child;
        if (smallest == i) return top;
        java.util.Collections.swap(heap, i, smallest);
        i = smallest;
    }
}""",
    },

    # ------------------------------------------------------------------
    "max-heap": {
        "python": """\
def push(heap, value):
    heap.append(value)
    i = len(heap) - 1
    while i > 0 and heap[i] > heap[(i - 1) // 2]:
        parent = (i - 1) // 2
        heap[i], heap[parent] = heap[parent], heap[i]
        i = parent

def pop(heap):
    top, heap[0] = heap[0], heap[-1]
    heap.pop()
    i = 0
    while True:
        largest = i
        for child in (2 * i + 1, 2 * i + 2):
            if child < len(heap) and heap[child] > heap[largest]:
                largest = child
        if largest == i:
            return top
        heap[i], heap[largest] = heap[largest], heap[i]
        i = largest""",
        "javascript": """\
function push(heap, value) {
  heap.push(value);
  let i = heap.length - 1;
  while (i > 0 && heap[i] > heap[(i - 1) >> 1]) {
    const parent = (i - 1) >> 1;
    [heap[i], heap[parent]] = [heap[parent], heap[i]];
    i = parent;
  }
}

function pop(heap) {
  const top = heap[0];
  heap[0] = heap[heap.length - 1];
  heap.pop();
  let i = 0;
  for (;;) {
    let largest = i;
    for (const child of [2 * i + 1, 2 * i + 2])
      if (child < heap.length && heap[child] > heap[largest]) largest = child;
    if (largest === i) return top;
    [heap[i], heap[largest]] = [heap[largest], heap[i]];
    i = largest;
  }
}""",
        "java": """\
static void push(java.util.List<Integer> heap, int value) {
    heap.add(value);
    int i = heap.size() - 1;
    while (i > 0 && heap.get(i) > heap.get((i - 1) / 2)) {
        java.util.Collections.swap(heap, i, (i - 1) / 2);
        i = (i - 1) / 2;
    }
}

static int pop(java.util.List<Integer> heap) {
    int top = heap.get(0);
    heap.set(0, heap.get(heap.size() - 1));
    heap.remove(heap.size() - 1);
    int i = 0;
    while (true) {
        int largest = i;
        for (int child = 2 * i + 1; child <= 2 * i + 2; child++)
            if (child < heap.size() && heap.get(child) > heap.get(largest)) largest = child;
        if (largest == i) return top;
        java.util.Collections.swap(heap, i, largest);
        i = largest;
    }
}""",
    },
}
